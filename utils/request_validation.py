"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from flask import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from utils.errors import ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise ValidationError("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise ValidationError("Request JSON body is required.")

    if not isinstance(data, dict):
        raise ValidationError("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise ValidationError("Request JSON body must not be empty.")

    if required_keys:
        missing = sorted(key for key in required_keys if not data.get(key))
        if missing:
            raise ValidationError(
                "Missing required fields: {}.".format(", ".join(missing)),
                errors=[{"field": key, "message": f"{key} is required"} for key in missing],
            )

    return data


def format_errors(exc: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors into ``[{field, message}]``."""

    errors = []
    for error in exc.errors():
        message = error.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.append(
            {
                "field": ".".join(str(part) for part in error.get("loc", ())),
                "message": message,
            }
        )
    return errors


def validate_data(schema: type[ModelT], data: dict, url: str = "") -> ModelT:
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = format_errors(exc)
        logger.warning("Validation error on %s: %s", url, errors)
        raise ValidationError("Validation failed", errors=errors) from exc


def validate_body(req: Request, schema: type[ModelT], *, allow_empty: bool = False) -> ModelT:
    """Parse the JSON body and validate it against ``schema``."""

    data = parse_json_request(req, allow_empty=allow_empty)
    return validate_data(schema, data, req.path)


def validate_query(req: Request, schema: type[ModelT]) -> ModelT:
    """Validate the query string; repeated keys keep their first value."""

    data = {key: req.args.get(key) for key in req.args.keys()}
    return validate_data(schema, data, req.path)
