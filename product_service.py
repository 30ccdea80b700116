import logging
from typing import Any, Dict, List

from errors import NotFoundError, StoreError
from update_set import build_update
from validators import parse_product_id, validate_create, validate_update

logger = logging.getLogger(__name__)


class ProductService:
    """
    Product CRUD over a store gateway exposing ``execute(sql, params)``.

    Holds no per-request state; the gateway (and its pool) is injected.
    """

    def __init__(self, database, allow_fractional_quantity: bool = False):
        self.database = database
        self.allow_fractional_quantity = allow_fractional_quantity

    def health(self) -> None:
        self.database.execute("SELECT 1")

    def list_products(self) -> List[Dict[str, Any]]:
        return self.database.execute("SELECT * FROM products ORDER BY id ASC").rows

    def get_product(self, raw_id: str) -> Dict[str, Any]:
        product_id = parse_product_id(raw_id)
        return self._fetch(product_id)

    def create_product(self, payload: Any) -> Dict[str, Any]:
        product = validate_create(payload, allow_fractional_quantity=self.allow_fractional_quantity)

        result = self.database.execute(
            "INSERT INTO products (name, price, quantity) VALUES (%s, %s, %s)",
            (product.name, product.price, product.quantity),
        )
        if not result.last_row_id:
            raise StoreError("Failed to retrieve created product")

        logger.info("Created product %s", result.last_row_id)
        return self._fetch(result.last_row_id)

    def update_product(self, raw_id: str, payload: Any) -> Dict[str, Any]:
        product_id = parse_product_id(raw_id)
        fields = validate_update(payload)

        update = build_update(fields, product_id)
        result = self.database.execute(update.sql, update.params)
        if result.row_count == 0:
            logger.info("Update target %s not found", product_id)
            raise NotFoundError()

        logger.info("Updated product %s (%s)", product_id, ", ".join(fields))
        return self._fetch(product_id)

    def delete_product(self, raw_id: str) -> None:
        product_id = parse_product_id(raw_id)

        result = self.database.execute("DELETE FROM products WHERE id = %s", (product_id,))
        if result.row_count == 0:
            logger.info("Delete target %s not found", product_id)
            raise NotFoundError()
        logger.info("Deleted product %s", product_id)

    def _fetch(self, product_id: int) -> Dict[str, Any]:
        rows = self.database.execute("SELECT * FROM products WHERE id = %s", (product_id,)).rows
        if not rows:
            raise NotFoundError()
        return rows[0]
