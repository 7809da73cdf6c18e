import pandas as pd


def log_graph_summary(logger, graph, popularity_index, attribute_index):
    logger.info("=== Interaction Graph ===")
    logger.info("Users: %s", f"{graph.number_of_users:,}")
    logger.info("Products: %s", f"{graph.number_of_products:,}")
    logger.info("Edges: %s", f"{graph.number_of_interactions:,}")

    n_possible = graph.number_of_users * graph.number_of_products
    if n_possible:
        logger.info("Density: %.4f%%", 100 * graph.number_of_interactions / n_possible)

    user_degrees = pd.Series([len(graph.products_of(u)) for u in graph.users()], dtype="int64")
    if len(user_degrees):
        single = int((user_degrees == 1).sum())
        logger.info("=== Products per User ===")
        logger.info(f"Min: {user_degrees.min()}, Max: {user_degrees.max()}")
        logger.info(f"Mean: {user_degrees.mean():.2f}, Median: {user_degrees.median():.2f}")
        logger.info(f"Users with only 1 product: {single:,} ({100*single/len(user_degrees):.1f}%)")

    logger.info("=== Popularity ===")
    top = popularity_index.top_n(5)
    logger.info(f"Top products: {[(p, popularity_index.count(p)) for p in top]}")

    logger.info("=== Attributes ===")
    logger.info(f"Attribute records: {len(attribute_index):,}")
    products = list(graph.products())
    missing = sum(1 for p in products if p not in attribute_index)
    if products:
        logger.info(f"Graph products without attributes: {missing:,} ({100*missing/len(products):.1f}%)")
    if missing > 0.5 * max(len(products), 1):
        logger.warning("⚠️  Most graph products have no attributes - content-based results will be sparse")
