"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from .base import APIModel


class NotificationRead(APIModel):
    """Representation of a notification delivered to the client."""

    id: int
    user: int
    title: str
    message: str
    read: bool
    link_type: str = ""
    link_id: str = ""
    created_at: datetime
    updated_at: datetime


class NotificationPagination(APIModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class NotificationPageRead(APIModel):
    """Paginated feed returned when ``page`` or ``limit`` is requested."""

    notifications: list[NotificationRead]
    pagination: NotificationPagination


class UnreadCountRead(APIModel):
    count: int


class MarkAllReadResponse(APIModel):
    success: bool = True
    modified_count: int


class DeleteResponse(APIModel):
    success: bool = True


class DeleteCountResponse(APIModel):
    success: bool = True
    deleted_count: int


__all__ = [
    "DeleteCountResponse",
    "DeleteResponse",
    "MarkAllReadResponse",
    "NotificationPageRead",
    "NotificationPagination",
    "NotificationRead",
    "UnreadCountRead",
]
