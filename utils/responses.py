"""Builders for the ``{success, message, data}`` JSON envelope."""

from __future__ import annotations

from http import HTTPStatus

from flask import jsonify


def success(
    data: dict | None = None,
    message: str | None = None,
    status: int = HTTPStatus.OK,
):
    payload: dict = {"success": True}
    if message is not None:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def created(data: dict | None = None, message: str | None = None):
    return success(data, message, HTTPStatus.CREATED)


def paginated(key: str, items: list, page) -> dict:
    """List payload: the serialized items under ``key`` plus pagination."""

    return {
        key: [item.to_dict() for item in items],
        "pagination": {"page": page.page, "limit": page.limit, "total": page.total},
    }
