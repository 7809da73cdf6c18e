from typing import Dict, Optional

from common.constants import BANNER_WIDTH, PATHS
from common.logging import log_graph_summary
from common.utils import describe_source, setup_logging
from ingestion import loaders
from recommenders import RecommendationConfig, RecommendationEngine

logger = setup_logging(__name__, PATHS["app_log_file"])


def load_interactions(engine: RecommendationEngine, source) -> int:
    """Add every interaction record to the engine. Returns the number of records applied."""
    name = describe_source(source)
    logger.info(f"Loading interactions from {name}...")
    records = loaders.parse_interactions(loaders.read_source(source), name)

    for user_id, product_id in records:
        engine.add_interaction(user_id, product_id)

    logger.info(f"Loaded {len(records)} interactions")
    return len(records)


def load_products(engine: RecommendationEngine, source) -> Dict[str, str]:
    """Index product attributes. Returns product_id → display name for products that have one."""
    name = describe_source(source)
    logger.info(f"Loading products from {name}...")
    records = loaders.parse_products(loaders.read_source(source), name)

    display_names = {}
    for product_id, attributes, display_name in records:
        engine.set_attributes(product_id, attributes)
        if display_name:
            display_names[product_id] = display_name

    logger.info(f"Loaded {len(records)} products ({len(display_names)} with display names)")
    return display_names


def build_engine(
    interactions_source,
    products_source=None,
    config: Optional[RecommendationConfig] = None,
) -> RecommendationEngine:
    """Run one ingestion pass and return a frozen engine."""
    engine, _ = build_engine_with_catalog(interactions_source, products_source, config)
    return engine


def build_engine_with_catalog(interactions_source, products_source=None, config=None):
    """Like build_engine, also returning the product display names read from the products source."""
    logger.info("=" * BANNER_WIDTH)
    logger.info("Building recommendation engine")
    logger.info("=" * BANNER_WIDTH)

    engine = RecommendationEngine(config)
    load_interactions(engine, interactions_source)

    display_names: Dict[str, str] = {}
    if products_source is not None:
        display_names = load_products(engine, products_source)

    log_graph_summary(logger, engine.graph, engine.popularity_index, engine.attribute_index)

    engine.freeze()
    logger.info("✓ Engine built")
    return engine, display_names


def build_default_engine():
    """Build from the configured data files."""
    return build_engine_with_catalog(PATHS["interactions"], PATHS["products"])
