"""
Ingestion - reads interaction and product sources into a ready engine.
"""

from ingestion.handler import (
    build_default_engine,
    build_engine,
    build_engine_with_catalog,
    load_interactions,
    load_products,
)

__all__ = [
    "build_default_engine",
    "build_engine",
    "build_engine_with_catalog",
    "load_interactions",
    "load_products",
]
