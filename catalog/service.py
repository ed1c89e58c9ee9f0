# catalog/service.py

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar, Union

from .models import Product
from .repository import ProductRepository
from .schemas import ProductBase, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PRICE_STEP = Decimal("0.01")
PRICE_LIMIT = Decimal(10) ** 16

T = TypeVar("T")


@dataclass(frozen=True)
class InvalidArgument:
    """A business-rule violation in the caller's input."""

    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: InvalidArgument


Result = Union[Ok[T], Err]


def _validate(request: ProductBase) -> Optional[InvalidArgument]:
    if not request.name or not request.name.strip():
        return InvalidArgument("Product name is required")
    if len(request.name) > NAME_MAX_LENGTH:
        return InvalidArgument(
            f"Product name must be at most {NAME_MAX_LENGTH} characters"
        )
    if request.description is not None and len(request.description) > DESCRIPTION_MAX_LENGTH:
        return InvalidArgument(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    if request.price <= 0:
        return InvalidArgument("Price must be greater than 0")
    # Must fit the Numeric(18, 2) column without rounding
    if request.price >= PRICE_LIMIT:
        return InvalidArgument(f"Price must be less than {PRICE_LIMIT}")
    if request.price != request.price.quantize(PRICE_STEP):
        return InvalidArgument("Price must have at most 2 decimal places")
    return None


class ProductService:
    """
    Validates product requests and maps them onto Product entities.

    Validation failures come back as Err(InvalidArgument); a missing product is
    Ok(None). Storage access goes through the repository only.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def get_all(self) -> List[Product]:
        return self.repository.get_all()

    def get_by_id(self, product_id: int) -> Result[Optional[Product]]:
        if product_id <= 0:
            return Err(InvalidArgument("Invalid product ID"))
        return Ok(self.repository.get_by_id(product_id))

    def create(self, request: ProductCreate) -> Result[Product]:
        error = _validate(request)
        if error is not None:
            logger.warning(f"Product Catalog: Rejected create request: {error.message}")
            return Err(error)

        product = Product(
            name=request.name,
            description=request.description,
            price=request.price,
            stock=request.stock,
            created_at=datetime.now(timezone.utc),
        )
        return Ok(self.repository.create(product))

    def update(self, product_id: int, request: ProductUpdate) -> Result[Optional[Product]]:
        existing = self.repository.get_by_id(product_id)
        if existing is None:
            return Ok(None)

        error = _validate(request)
        if error is not None:
            logger.warning(
                f"Product Catalog: Rejected update of product {product_id}: {error.message}"
            )
            return Err(error)

        existing.name = request.name
        existing.description = request.description
        existing.price = request.price
        existing.stock = request.stock
        existing.updated_at = datetime.now(timezone.utc)
        return Ok(self.repository.update(existing))

    def delete(self, product_id: int) -> bool:
        return self.repository.delete(product_id)

    def search(self, term: Optional[str]) -> List[Product]:
        if term is None or not term.strip():
            return self.repository.get_all()
        return self.repository.search(term)
