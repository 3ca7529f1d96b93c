"""Listing use cases."""

from .list_items import (
    ListItemsRequest,
    ListItemsResponse,
    ListItemsUseCase,
    ListedItem,
)

__all__ = [
    "ListItemsRequest",
    "ListItemsResponse",
    "ListItemsUseCase",
    "ListedItem",
]
