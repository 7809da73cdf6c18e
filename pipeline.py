import argparse
import sys

from common.constants import BANNER_WIDTH, ID_PREFIXES, PATHS, USER_ROLE
from common.errors import IngestionError, NotFoundError
from common.utils import setup_logging
from ingestion import build_engine
from recommenders import RecommendationEngine, sorted_ids


def run_recommendations(engine: RecommendationEngine, raw_user_id: str, logger, out=sys.stdout):
    """Print the three recommendation lists for one user."""
    user_id = ID_PREFIXES[USER_ROLE] + raw_user_id

    try:
        collaborative = sorted_ids(engine.collaborative(user_id))
        print(f"Recommendations for User {raw_user_id}: {collaborative}", file=out)

        content_based = sorted_ids(engine.content_based(user_id))
        print(f"Content-Based Recommendations for User {raw_user_id}: {content_based}", file=out)
    except NotFoundError:
        logger.info(f"User {raw_user_id} not in graph, cold start")
        print(f"User {raw_user_id} has no history, showing popular products instead", file=out)

    popular = engine.popularity()
    print(f"Popularity-Based Recommendations: {popular}", file=out)


def run_pipeline(logger, interactions_path, products_path, user_id, out=sys.stdout):
    logger.info("=" * BANNER_WIDTH)
    logger.info("STAGE 1: Ingest interaction and product data")
    logger.info("=" * BANNER_WIDTH)

    engine = build_engine(interactions_path, products_path)
    logger.info("✓ Stage 1 completed successfully")

    logger.info("=" * BANNER_WIDTH)
    logger.info(f"STAGE 2: Recommend for user {user_id}")
    logger.info("=" * BANNER_WIDTH)

    run_recommendations(engine, user_id, logger, out)
    logger.info("✓ Stage 2 completed successfully")
    return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Recommend products from historical interactions.")
    parser.add_argument("--interactions", default=PATHS["interactions"], help="interaction CSV (user_id, product_id, ...)")
    parser.add_argument(
        "--products", default=PATHS["products"], help="product CSV (product_id, category, price_range, brand, [name])"
    )
    parser.add_argument("--user", default="1", help="raw user id to recommend for")
    return parser.parse_args(argv)


def main(argv=None):
    """Parse arguments and run the pipeline."""
    args = parse_args(argv)
    logger = setup_logging("pipeline", PATHS["app_log_file"])
    try:
        success = run_pipeline(logger, args.interactions, args.products, args.user)
    except (IngestionError, FileNotFoundError) as e:
        logger.error(f"Ingestion failed: {e}")
        print(f"Ingestion failed: {e}", file=sys.stderr)
        return 1
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
