from typing import Dict, List, Optional, Tuple

from common.constants import ID_PREFIXES, PATHS, PRODUCT_ROLE, USER_ROLE
from common.errors import IngestionError
from common.utils import setup_logging
from ingestion import build_engine_with_catalog
from recommenders import RecommendationEngine, sorted_ids

logger = setup_logging(__name__, PATHS["app_log_file"])


class RecommendationService:
    """Service for generating product recommendations from one engine snapshot."""

    def __init__(
        self,
        engine: Optional[RecommendationEngine] = None,
        display_names: Optional[Dict[str, str]] = None,
        interactions_path: Optional[str] = None,
        products_path: Optional[str] = None,
    ):
        """Use the given engine, or build one from the configured data files."""
        self.interactions_path = interactions_path or PATHS["interactions"]
        self.products_path = products_path or PATHS["products"]

        self.engine: Optional[RecommendationEngine] = None
        self.display_names: Dict[str, str] = {}
        self.ready: bool = False
        self.init_error: Optional[str] = None

        if engine is not None:
            self.engine = engine
            self.display_names = dict(display_names or {})
            self.ready = engine.ready
            if not self.ready:
                self.init_error = "Engine has not been frozen"
            return

        logger.info("Initializing RecommendationService...")
        try:
            self.engine, self.display_names = build_engine_with_catalog(self.interactions_path, self.products_path)
            self.ready = True
            logger.info("✓ RecommendationService initialized successfully")
        except (FileNotFoundError, IngestionError) as e:
            self.init_error = str(e)
            logger.error(f"Failed to initialize RecommendationService: {self.init_error}")

    def reinitialize(self):
        """Build a fresh engine from the data files and swap it in."""
        logger.info("Attempting to reinitialize RecommendationService...")
        fresh = RecommendationService(interactions_path=self.interactions_path, products_path=self.products_path)
        self.engine, self.display_names = fresh.engine, fresh.display_names
        self.ready, self.init_error = fresh.ready, fresh.init_error

    def status(self) -> Dict[str, object]:
        """Return readiness status, graph sizes and any initialization errors."""
        if not self.ready:
            return {"ready": False, "error": self.init_error}
        graph = self.engine.graph
        return {
            "ready": True,
            "error": None,
            "users": graph.number_of_users,
            "products": graph.number_of_products,
            "interactions": graph.number_of_interactions,
            "attribute_records": len(self.engine.attribute_index),
        }

    def collaborative(self, user_id: str) -> List[Dict]:
        """Raises NotFoundError for unknown users."""
        self._require_ready()
        return self._summaries(sorted_ids(self.engine.collaborative(to_user_node(user_id))))

    def content_based(self, user_id: str) -> List[Dict]:
        """Raises NotFoundError for unknown users."""
        self._require_ready()
        return self._summaries(sorted_ids(self.engine.content_based(to_user_node(user_id))))

    def popularity(self) -> List[Dict]:
        self._require_ready()
        return self._summaries(self.engine.popularity())

    def recommend(self, user_id: Optional[str], strategy: Optional[str] = None) -> Tuple[List[Dict], str]:
        """Strategy results for known users, popularity for cold-start users."""
        self._require_ready()
        node = to_user_node(user_id) if user_id else None
        product_ids, used = self.engine.recommend(node, strategy)
        logger.info(f"Returned {len(product_ids)} recommendations for user={user_id} using strategy: {used}")
        return self._summaries(product_ids), used

    def get_product_details(self, product_id: str) -> Optional[Dict]:
        """Retrieve attributes, display name and popularity for a raw product id."""
        self._require_ready()
        node = to_product_node(product_id)
        if not self.engine.graph.contains(node):
            logger.warning(f"Product {product_id} not found")
            return None

        details = self._summary(node)
        details["interactions"] = self.engine.popularity_index.count(node)
        return details

    def _summaries(self, product_ids: List[str]) -> List[Dict]:
        return [self._summary(p) for p in product_ids]

    def _summary(self, product_id: str) -> Dict:
        attributes = self.engine.attribute_index.get(product_id) or {}
        return {
            "product_id": from_product_node(product_id),
            "name": self.display_names.get(product_id),
            "category": attributes.get("category"),
            "price_range": attributes.get("price_range"),
            "brand": attributes.get("brand"),
        }

    def _require_ready(self):
        if not self.ready:
            raise ValueError("Recommendation engine is not available")


def to_user_node(user_id: str) -> str:
    return ID_PREFIXES[USER_ROLE] + str(user_id)


def to_product_node(product_id: str) -> str:
    return ID_PREFIXES[PRODUCT_ROLE] + str(product_id)


def from_product_node(node_id: str) -> str:
    prefix = ID_PREFIXES[PRODUCT_ROLE]
    return node_id[len(prefix):] if node_id.startswith(prefix) else node_id
