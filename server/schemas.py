from typing import Optional
from pydantic import BaseModel, Field

class ProductSummary(BaseModel):
    product_id: str
    name: Optional[str] = None
    category: Optional[str] = None
    price_range: Optional[str] = None
    brand: Optional[str] = None

class RecommendResponse(BaseModel):
    """
    Recommendations for one query.

    strategy: "collaborative", "content" or "popularity"
    products: collaborative/content results sorted by product id; popularity results in rank order
    """
    user_id: Optional[str] = None
    strategy: str
    products: list[ProductSummary]

class ProductDetails(BaseModel):
    """
    Full product details for a product page.

    Retrieved on-demand by raw product id.
    """
    product_id: str
    name: Optional[str] = None
    category: Optional[str] = None
    price_range: Optional[str] = None
    brand: Optional[str] = None
    interactions: int = Field(0, ge=0)

class StatusResponse(BaseModel):
    ready: bool
    error: Optional[str] = None
    users: int = 0
    products: int = 0
    interactions: int = 0
    attribute_records: int = 0
