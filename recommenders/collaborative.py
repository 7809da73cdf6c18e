"""
Collaborative filtering based recommendations.
Walks the interaction graph two hops out: user → product → co-visiting user → product.
"""

import logging
from typing import FrozenSet

from common.constants import *
from common.utils import *

from .data_models import Found, Lookup, NotFound, RecommendationContext

logger = setup_logging(__name__, PATHS["app_log_file"], logging.DEBUG)


def get_collaborative_recommendations(context: RecommendationContext, user_id: str) -> Lookup:
    """Products co-visited by other users, minus the user's own history. Unranked."""

    graph = context["graph"]
    if not graph.contains(user_id):
        logger.debug(f"[CF] Unknown user {user_id}")
        return NotFound(user_id)

    visited = graph.products_of(user_id)
    logger.debug(f"[CF] {user_id} has {len(visited)} visited products")

    co_visitors = set()
    for product_id in visited:
        co_visitors.update(u for u in graph.users_of(product_id) if u != user_id)

    candidates = set()
    for other_user in co_visitors:
        candidates.update(graph.products_of(other_user))

    recommended: FrozenSet[str] = frozenset(candidates - visited)
    logger.debug(
        f"[CF] {len(co_visitors)} co-visiting users, {len(candidates)} 2-hop products, {len(recommended)} recommended"
    )
    return Found(recommended)
