# catalog/schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Prices stay exact internally but go over the wire as JSON numbers
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductBase(BaseModel):
    # Business rules (required name, positive price, lengths) are enforced by
    # ProductService so violations surface as 400 with a message.
    name: str = ""
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    stock: int = 0

    @field_validator("price", mode="before")
    @classmethod
    def price_from_float_repr(cls, value):
        # JSON floats go through repr so 29.99 stays Decimal("29.99")
        if isinstance(value, float):
            return str(value)
        return value


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Price
    stock: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'ok' while the process serves requests.")
    service: str
