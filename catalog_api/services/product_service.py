from typing import Any, List
import logging

from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.exceptions import BadRequestError, InternalError, NotFoundError
from catalog_api.models.product import products_table
from catalog_api.schemas.product import ProductPayload
from catalog_api.storage import StorageAdapter
from catalog_api.validators import is_storable_id, validate_id, validate_product

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found"


class ProductService:
    """
    Service class for Product CRUD operations.

    Every operation validates its input before the storage call and turns
    storage faults into ``InternalError``. Nothing is retried or cached.

    This service handles:
    - Listing products
    - Reading a product by id
    - Creating products
    - Replacing products (full update, no merge)
    - Deleting products
    """

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    def list_products(self) -> List[dict]:
        """
        Get every product, ordered by id ascending.

        Returns:
            List of product rows, possibly empty
        """
        statement = select(products_table).order_by(products_table.c.id)
        try:
            return self.storage.fetch_all(statement)
        except SQLAlchemyError as e:
            raise self._storage_fault("Failed to fetch products", e) from e

    def get_product(self, raw_id: Any) -> dict:
        """
        Get a product by ID.

        Args:
            raw_id: Identifier as received, validated here

        Returns:
            The stored row

        Raises:
            ValidationError: id does not parse as an integer
            NotFoundError: no product has that id
        """
        product_id = validate_id(raw_id)
        if not is_storable_id(product_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        statement = select(products_table).where(products_table.c.id == product_id)
        try:
            product = self.storage.fetch_one(statement)
        except SQLAlchemyError as e:
            raise self._storage_fault("Failed to fetch product", e) from e

        if product is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return product

    def create_product(self, data: Any) -> dict:
        """
        Create a new product.

        Args:
            data: Untrusted request body

        Returns:
            Created record including the generated id
        """
        payload = validate_product(data)
        statement = insert(products_table).values(**payload.model_dump())
        try:
            with self.storage.transaction():
                result = self.storage.execute(statement)
                if not result.last_insert_rowid:
                    raise BadRequestError("Failed to add the product")
        except SQLAlchemyError as e:
            raise self._storage_fault("Failed to add the product", e) from e

        logger.info("Created product %s", result.last_insert_rowid)
        return self._record(result.last_insert_rowid, payload)

    def update_product(self, raw_id: Any, data: Any) -> dict:
        """
        Replace every mutable field of a product.

        Both update routes end up here, whether the id came from the path
        or from the request body. An omitted description is stored as "".

        Args:
            raw_id: Identifier as received, validated here
            data: Untrusted request body

        Returns:
            Updated record
        """
        product_id = validate_id(raw_id)
        payload = validate_product(data)
        if not is_storable_id(product_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        statement = (
            update(products_table)
            .where(products_table.c.id == product_id)
            .values(**payload.model_dump())
        )
        try:
            with self.storage.transaction():
                result = self.storage.execute(statement)
                self._check_single_row(result.changes, product_id, "update")
        except SQLAlchemyError as e:
            raise self._storage_fault("Failed to update the product", e) from e

        logger.info("Updated product %s", product_id)
        return self._record(product_id, payload)

    def delete_product(self, raw_id: Any) -> dict:
        """
        Delete a product.

        Args:
            raw_id: Identifier as received, validated here

        Returns:
            Confirmation message
        """
        product_id = validate_id(raw_id)
        if not is_storable_id(product_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        statement = delete(products_table).where(products_table.c.id == product_id)
        try:
            with self.storage.transaction():
                result = self.storage.execute(statement)
                self._check_single_row(result.changes, product_id, "delete")
        except SQLAlchemyError as e:
            raise self._storage_fault("Failed to delete the product", e) from e

        logger.info("Deleted product %s", product_id)
        return {"message": "Product deleted successfully"}

    def _check_single_row(self, changes: int, product_id: int, action: str) -> None:
        """Raise unless exactly one row was touched; runs inside the transaction."""
        if changes == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if changes > 1:
            logger.error(
                "%s of product %s affected %s rows; rolling back", action, product_id, changes
            )
            raise InternalError(f"Failed to {action} the product")

    def _storage_fault(self, message: str, error: Exception) -> InternalError:
        """Log a storage exception and wrap it."""
        logger.exception("%s: %s", message, error)
        return InternalError(message, details=str(error))

    @staticmethod
    def _record(product_id: int, payload: ProductPayload) -> dict:
        return {"id": product_id, **payload.model_dump()}
