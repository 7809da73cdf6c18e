"""
Type definitions for the recommendation engine.
Using TypedDicts for structured data with type hints.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Generic, TypeVar, TypedDict, Union

from common.errors import NotFoundError

if TYPE_CHECKING:
    from .graph import InteractionGraph
    from .indexes import AttributeIndex, PopularityIndex

T = TypeVar("T")


class ProductAttributes(TypedDict):
    """Descriptive attributes of a product. Exactly these three fields."""
    category: str
    price_range: str
    brand: str


class RecommendationContext(TypedDict):
    """
    World state - the structures the strategies read from.
    Built once by ingestion, frozen, then passed to all recommendation functions.
    """
    graph: "InteractionGraph"  # Bipartite user/product interaction graph
    attributes: "AttributeIndex"  # product_id → ProductAttributes
    popularity: "PopularityIndex"  # product_id → interaction count


class RecommendationConfig(TypedDict, total=False):
    """Runtime behavior parameters."""
    popularity_k: int  # Number of products returned by the popularity strategy
    default_strategy: str  # "collaborative" or "content"


@dataclass(frozen=True)
class Found(Generic[T]):
    """A query for a known user, carrying its result."""
    data: T

    def unwrap(self) -> T:
        return self.data


@dataclass(frozen=True)
class NotFound:
    """A query for a user absent from the graph (cold start)."""
    user_id: str

    def unwrap(self):
        raise NotFoundError(self.user_id)


Lookup = Union[Found[FrozenSet[str]], NotFound]
