"""
Recommendation engine that owns the graph and indexes and coordinates the strategies.
Known users get collaborative or content-based results; unknown users fall back to popularity.
"""

from typing import FrozenSet, Iterable, List, Optional, Tuple

from common.constants import *
from common.errors import EngineStateError
from common.utils import *

from .collaborative import get_collaborative_recommendations
from .content_based import get_content_based_recommendations
from .data_models import Lookup, NotFound, ProductAttributes, RecommendationConfig, RecommendationContext
from .graph import InteractionGraph
from .indexes import AttributeIndex, PopularityIndex
from .popularity import get_popularity_recommendations

logger = setup_logging(__name__, APP_LOG_FILE)

BUILDING = "building"
READY = "ready"

STRATEGIES = ("collaborative", "content")


class RecommendationEngine:
    """
    In-memory recommender over one interaction snapshot.

    The engine starts in the `building` state, where ingestion adds
    interactions and attributes. `freeze()` moves it to `ready` once; from
    then on it only answers queries. Rebuilding means constructing a new
    engine.
    """

    def __init__(self, config: Optional[RecommendationConfig] = None):
        self.graph = InteractionGraph()
        self.attribute_index = AttributeIndex()
        self.popularity_index = PopularityIndex()
        self.config: RecommendationConfig = {
            "popularity_k": RECOMMEND["popularity_k"],
            "default_strategy": RECOMMEND["default_strategy"],
        }
        if config:
            self.config.update(config)
        self.state = BUILDING

    @property
    def context(self) -> RecommendationContext:
        return {"graph": self.graph, "attributes": self.attribute_index, "popularity": self.popularity_index}

    @property
    def ready(self) -> bool:
        return self.state == READY

    # region Building
    def add_interaction(self, user_id: str, product_id: str) -> None:
        """Record one interaction occurrence: edge (idempotent) plus a popularity tick."""
        self._require(BUILDING)
        self.graph.add_interaction(user_id, product_id)
        self.popularity_index.record_interaction(product_id)

    def set_attributes(self, product_id: str, attributes: ProductAttributes) -> None:
        """Add the ProductNode if missing, then store its attributes."""
        self._require(BUILDING)
        self.graph.add_product(product_id)
        self.attribute_index.set(product_id, attributes)

    def freeze(self) -> "RecommendationEngine":
        self._require(BUILDING)
        self.state = READY
        logger.info(
            f"Engine ready: {self.graph.number_of_users} users, {self.graph.number_of_products} products, "
            f"{self.graph.number_of_interactions} edges, {len(self.attribute_index)} attribute records"
        )
        return self

    # endregion

    # region Queries
    def find_collaborative(self, user_id: str) -> Lookup:
        self._require(READY)
        return get_collaborative_recommendations(self.context, user_id)

    def find_content_based(self, user_id: str) -> Lookup:
        self._require(READY)
        return get_content_based_recommendations(self.context, user_id)

    def collaborative(self, user_id: str) -> FrozenSet[str]:
        """Raises NotFoundError for users absent from the graph."""
        return self.find_collaborative(user_id).unwrap()

    def content_based(self, user_id: str) -> FrozenSet[str]:
        """Raises NotFoundError for users absent from the graph."""
        return self.find_content_based(user_id).unwrap()

    def popularity(self) -> List[str]:
        """Cold-start list, ordered. Needs no user and never raises on an empty index."""
        self._require(READY)
        return get_popularity_recommendations(self.context, self.config["popularity_k"])

    def visited(self, user_id: str) -> FrozenSet[str]:
        self._require(READY)
        return frozenset(self.graph.products_of(user_id))

    def recommend(self, user_id: Optional[str], strategy: Optional[str] = None) -> Tuple[List[str], str]:
        """
        Generate recommendations with cold-start fallback.
        - Known users with history: the requested strategy, sorted by product id
        - Unknown users or users without history: popularity
        """
        self._require(READY)
        strategy = strategy or self.config["default_strategy"]
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {strategy!r}, expected one of {STRATEGIES}")

        logger.info(f"user_id={user_id}, strategy={strategy}")

        if user_id is None:
            lookup: Lookup = NotFound("")
        elif strategy == "collaborative":
            lookup = self.find_collaborative(user_id)
        else:
            lookup = self.find_content_based(user_id)

        if isinstance(lookup, NotFound) or not self.graph.products_of(user_id):
            logger.info(f"Going on a cold start path for {user_id}")
            return self.popularity(), "popularity"

        return sorted_ids(lookup.data), strategy

    # endregion

    def _require(self, state: str) -> None:
        if self.state != state:
            raise EngineStateError(f"Operation requires engine state {state!r}, engine is {self.state!r}")


def sorted_ids(product_ids: Iterable[str]) -> List[str]:
    """Stable display order for unordered strategy results."""
    return sorted(product_ids)
