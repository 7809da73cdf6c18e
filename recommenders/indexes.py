"""
Product-keyed indexes derived during ingestion: attributes and popularity.
"""

from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from .data_models import ProductAttributes


class AttributeIndex:
    """product_id → ProductAttributes. Later writes overwrite earlier ones."""

    def __init__(self):
        self._attributes: Dict[str, ProductAttributes] = {}

    def set(self, product_id: str, attributes: ProductAttributes) -> None:
        self._attributes[product_id] = {
            "category": attributes["category"],
            "price_range": attributes["price_range"],
            "brand": attributes["brand"],
        }

    def get(self, product_id: str) -> Optional[ProductAttributes]:
        return self._attributes.get(product_id)

    def items(self) -> Iterator[Tuple[str, ProductAttributes]]:
        return iter(self._attributes.items())

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)


class PopularityIndex:
    """product_id → number of interaction occurrences (not unique users)."""

    def __init__(self):
        self._counts: Counter = Counter()

    def record_interaction(self, product_id: str) -> None:
        self._counts[product_id] += 1

    def count(self, product_id: str) -> int:
        return self._counts.get(product_id, 0)

    def top_n(self, n: int) -> List[str]:
        """The n most interacted products, count descending then product id ascending."""
        if n <= 0:
            return []
        ranked = sorted(self._counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [product_id for product_id, _ in ranked[:n]]

    def __len__(self) -> int:
        return len(self._counts)
