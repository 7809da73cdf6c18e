"""
Popularity recommendations for cold-start users.
"""

from typing import List

from common.constants import PATHS, RECOMMEND
from common.utils import setup_logging

from .data_models import RecommendationContext

logger = setup_logging(__name__, PATHS["app_log_file"])


def get_popularity_recommendations(context: RecommendationContext, k: int = RECOMMEND["popularity_k"]) -> List[str]:
    """Top-k products by interaction count, ties broken by product id."""
    top = context["popularity"].top_n(k)
    logger.debug(f"[POP] Returning {len(top)} of {len(context['popularity'])} products")
    return top
