import os
import tempfile

# Keep test logs out of the project tree; must run before project modules are imported
os.environ.setdefault("RECO_LOG_DIR", tempfile.mkdtemp(prefix="reco-logs-"))

import pytest

from ingestion import build_engine, build_engine_with_catalog

INTERACTIONS = [
    ("user_id", "product_id", "timestamp"),
    ("1", "A", "2024-01-01"),
    ("1", "B", "2024-01-02"),
    ("2", "A", "2024-01-03"),
    ("2", "C", "2024-01-04"),
]

PRODUCTS = [
    ("product_id", "category", "price_range", "brand", "name"),
    ("A", "shoes", "mid", "Acme", "Trail Runner"),
    ("B", "shoes", "low", "Acme", "Canvas Sneaker"),
    ("C", "hats", "low", "Hatco", "Bucket Hat"),
]


@pytest.fixture
def engine():
    """Two users sharing product A; A and B are shoes, C is a hat."""
    return build_engine(INTERACTIONS, PRODUCTS)


@pytest.fixture
def catalog_engine():
    return build_engine_with_catalog(INTERACTIONS, PRODUCTS)


@pytest.fixture
def larger_engine():
    """Adds a third user, an unvisited shoe (D) and an attribute-less product (E)."""
    interactions = INTERACTIONS + [
        ("3", "C", ""),
        ("3", "E", ""),
        ("3", "A", ""),
        ("4", "D", ""),
    ]
    products = PRODUCTS + [
        ("D", "shoes", "high", "Stride", "Leather Boot"),
        ("F", "shoes", "mid", "Stride", "Slip On"),
    ]
    return build_engine(interactions, products)
