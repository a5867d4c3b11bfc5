"""Common schemas used across the application."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    """Generic list wrapper.

    Usage:
        response_model=ListResponse[ShipmentOut]

    Returns:
        {"items": [...], "count": 12}
    """
    items: list[T]
    count: int
