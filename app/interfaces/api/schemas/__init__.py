from .auth import DeleteAccountRequest, RegisterRequest, RegisterResponse, Token
from .event import EventApprovalRequest, EventCancelRequest, EventCreate, EventRead
from .notification import (
    DeleteCountResponse,
    DeleteResponse,
    MarkAllReadResponse,
    NotificationPageRead,
    NotificationPagination,
    NotificationRead,
    UnreadCountRead,
)
from .registration import RegistrationCreate, RegistrationRead
from .user import RoleUpdateRequest, UserRead

__all__ = [
    "DeleteAccountRequest",
    "DeleteCountResponse",
    "DeleteResponse",
    "EventApprovalRequest",
    "EventCancelRequest",
    "EventCreate",
    "EventRead",
    "MarkAllReadResponse",
    "NotificationPageRead",
    "NotificationPagination",
    "NotificationRead",
    "RegisterRequest",
    "RegisterResponse",
    "RegistrationCreate",
    "RegistrationRead",
    "RoleUpdateRequest",
    "Token",
    "UnreadCountRead",
    "UserRead",
]
