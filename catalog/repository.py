# catalog/repository.py

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .models import Product

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Persists Product entities through a SQLAlchemy session.
    Every write commits immediately. Absence is reported as None/False, while
    storage errors roll the session back and propagate unchanged.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Product]:
        return list(self.db.scalars(select(Product).order_by(Product.id)))

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def create(self, product: Product) -> Product:
        self.db.add(product)
        self._commit("creating product")
        self.db.refresh(product)
        logger.info(
            f"Product Catalog: Product '{product.name}' (ID: {product.id}) persisted."
        )
        return product

    def update(self, product: Product) -> Optional[Product]:
        # Query the table itself; the identity map may still hold a row that
        # another session has deleted.
        exists = self.db.scalar(select(Product.id).where(Product.id == product.id))
        if exists is None:
            self.db.rollback()
            logger.warning(
                f"Product Catalog: Product {product.id} vanished before update."
            )
            return None
        self.db.add(product)
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            logger.warning(
                f"Product Catalog: Product {product.id} was deleted while updating."
            )
            return None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Product Catalog: Error updating product {product.id}: {e}", exc_info=True
            )
            raise
        self.db.refresh(product)
        return product

    def delete(self, product_id: int) -> bool:
        product = self.db.get(Product, product_id)
        if product is None:
            return False
        self.db.delete(product)
        self._commit(f"deleting product {product_id}")
        return True

    def search(self, term: str) -> List[Product]:
        # autoescape keeps % and _ in the term literal
        query = (
            select(Product)
            .where(
                or_(
                    Product.name.icontains(term, autoescape=True),
                    Product.description.icontains(term, autoescape=True),
                )
            )
            .order_by(Product.id)
        )
        return list(self.db.scalars(query))

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Product Catalog: Error {action}: {e}", exc_info=True)
            raise
