"""
Recommendation system components.
Graph and indexes wrapped by an engine; strategies are pure functions over a context.
"""

from .data_models import (
    Found,
    Lookup,
    NotFound,
    ProductAttributes,
    RecommendationConfig,
    RecommendationContext,
)
from .graph import InteractionGraph
from .indexes import AttributeIndex, PopularityIndex
from .collaborative import get_collaborative_recommendations
from .content_based import get_content_based_recommendations
from .popularity import get_popularity_recommendations
from .orchestrator import RecommendationEngine, sorted_ids

__all__ = [
    "Found",
    "Lookup",
    "NotFound",
    "ProductAttributes",
    "RecommendationConfig",
    "RecommendationContext",
    "InteractionGraph",
    "AttributeIndex",
    "PopularityIndex",
    "get_collaborative_recommendations",
    "get_content_based_recommendations",
    "get_popularity_recommendations",
    "RecommendationEngine",
    "sorted_ids",
]
