"""
Content-based recommendations using product attributes.
A product is recommended when it shares a category with something the user already has.
"""

from typing import Dict, FrozenSet, Set

from common.constants import *
from common.utils import *

from .data_models import Found, Lookup, NotFound, RecommendationContext

logger = setup_logging(__name__, APP_LOG_FILE)


def get_content_based_recommendations(context: RecommendationContext, user_id: str) -> Lookup:
    """
    Generate content-based recommendations.

    Products without an attribute record are skipped, both as the user's
    own products and as candidates.

    Returns:
        Found(frozenset of product ids) or NotFound(user_id)
    """

    graph = context["graph"]
    if not graph.contains(user_id):
        logger.debug(f"[CB] Unknown user {user_id}")
        return NotFound(user_id)

    visited = graph.products_of(user_id)

    # Categories of the user's products that have attributes
    categories = set()
    for product_id in visited:
        attributes = context["attributes"].get(product_id)
        if attributes is not None:
            categories.add(attributes["category"])

    if not categories:
        logger.debug(f"[CB] No attributed products for {user_id}")
        return Found(frozenset())

    by_category = _group_by_category(context)
    candidates: Set[str] = set()
    for category in categories:
        candidates.update(by_category.get(category, ()))

    recommended: FrozenSet[str] = frozenset(candidates - visited)
    logger.debug(f"[CB] Searched {len(categories)} categories, {len(recommended)} recommended for {user_id}")
    return Found(recommended)


def _group_by_category(context: RecommendationContext) -> Dict[str, Set[str]]:
    """Invert the attribute index into category → product ids."""
    groups: Dict[str, Set[str]] = {}
    for product_id, attributes in context["attributes"].items():
        groups.setdefault(attributes["category"], set()).add(product_id)
    return groups
