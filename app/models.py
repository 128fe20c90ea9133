# app/models.py
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(ApiModel):
    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = True


class ProductIn(ApiModel):
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = True


class ProductUpdate(ApiModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Union[int, float]] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = None


class Pagination(ApiModel):
    current_page: int
    total_pages: int
    total_products: int
    has_next: bool
    has_prev: bool


class ProductPage(ApiModel):
    products: List[Product]
    pagination: Pagination


class SearchResult(ApiModel):
    query: str
    results: List[Product]
    count: int


class ProductStats(ApiModel):
    total_products: int
    in_stock_count: int
    out_of_stock_count: int
    categories: Dict[str, int] = Field(default_factory=dict)
    average_price: Union[int, float] = 0


class DeletedProduct(ApiModel):
    message: str
    product: Product
