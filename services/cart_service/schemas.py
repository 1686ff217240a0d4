from typing import List

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CartAnalysisResult(BaseModel):
    """Total and line items read from a cart screenshot."""

    total_price: str = Field(description="The total price from the cart, including currency.")
    items: List[str] = Field(default_factory=list, description="A list of item descriptions from the cart.")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
