"""Request validation for product payloads and path ids."""
import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

CREATE_REQUIRED_MESSAGE = "name, price and quantity are required and valid"
NO_FIELDS_MESSAGE = "no fields to update"
INVALID_ID_MESSAGE = "id must be an integer"

_ID_RE = re.compile(r"[+-]?[0-9]+")


def _as_payload(payload: Any) -> Dict[str, Any]:
    # a missing body or a non-object body behaves like {}
    return payload if isinstance(payload, dict) else {}


def validate_create(payload: Any, allow_fractional_quantity: bool = False) -> ProductCreate:
    try:
        return ProductCreate.model_validate(
            _as_payload(payload),
            context={"allow_fractional_quantity": allow_fractional_quantity},
        )
    except PydanticValidationError as e:
        logger.info("Rejected create payload: %s", [err["loc"] for err in e.errors()])
        raise ValidationError(CREATE_REQUIRED_MESSAGE) from None


def validate_update(payload: Any) -> Dict[str, Any]:
    """
    Validate a partial update and return only the supplied fields,
    keyed by column name in (name, price, quantity) order.
    """
    try:
        update = ProductUpdate.model_validate(_as_payload(payload))
    except PydanticValidationError as e:
        message = e.errors()[0]["msg"]
        logger.info("Rejected update payload: %s", message)
        raise ValidationError(message) from None

    fields = update.model_dump(exclude_none=True)
    if not fields:
        raise ValidationError(NO_FIELDS_MESSAGE)
    return fields


def parse_product_id(raw: Optional[str]) -> int:
    text = (raw or "").strip()
    if not _ID_RE.fullmatch(text):
        raise ValidationError(INVALID_ID_MESSAGE)
    try:
        return int(text)
    except ValueError:
        raise ValidationError(INVALID_ID_MESSAGE) from None
