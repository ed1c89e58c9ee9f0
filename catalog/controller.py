# catalog/controller.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from .db import get_db
from .repository import ProductRepository
from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .service import Err, ProductService, Result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    return ProductService(repository)


def _unwrap(result: Result):
    """Returns the Ok value, or raises a 400 carrying the InvalidArgument message."""
    if isinstance(result, Err):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=result.error.message
        )
    return result.value


def _not_found(product_id: int) -> HTTPException:
    logger.warning(f"Product Catalog: Product with ID {product_id} not found.")
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="Retrieve a list of all products",
)
def list_products(service: ProductService = Depends(get_product_service)):
    products = service.get_all()
    logger.info(f"Product Catalog: Retrieved {len(products)} products.")
    return products


# Declared before /{product_id} so "search" is not parsed as an id
@router.get(
    "/search",
    response_model=List[ProductResponse],
    summary="Search products by name or description",
)
def search_products(
    term: Optional[str] = Query(None, max_length=255),
    service: ProductService = Depends(get_product_service),
):
    """
    Case-insensitive substring search over name and description.
    A missing or blank term returns every product.
    """
    products = service.search(term)
    logger.info(f"Product Catalog: Search for '{term}' matched {len(products)} products.")
    return products


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Retrieve a single product by ID",
)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    product = _unwrap(service.get_by_id(product_id))
    if product is None:
        raise _not_found(product_id)
    return product


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
):
    logger.info(f"Product Catalog: Creating product: {payload.name}")
    product = _unwrap(service.create(payload))
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update an existing product by ID",
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    logger.info(f"Product Catalog: Updating product with ID: {product_id}")
    product = _unwrap(service.update(product_id, payload))
    if product is None:
        raise _not_found(product_id)
    logger.info(f"Product Catalog: Product {product_id} updated successfully.")
    return product


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product by ID",
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    if not service.delete(product_id):
        raise _not_found(product_id)
    logger.info(f"Product Catalog: Product {product_id} deleted successfully.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
