"""Public helpers for emitting domain notifications and reading the feed."""

from .events import (
    notify_account_deleted,
    notify_checked_in,
    notify_event_cancelled,
    notify_event_deleted,
    notify_event_moderated,
    notify_event_submitted,
    notify_registration_created,
    notify_role_updated,
)
from .feed import (
    acknowledge_notifications,
    clear_notifications,
    count_unread_notifications,
    delete_notification,
    delete_selected_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    parse_notification_ids,
)

__all__ = [
    "acknowledge_notifications",
    "clear_notifications",
    "count_unread_notifications",
    "delete_notification",
    "delete_selected_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_account_deleted",
    "notify_checked_in",
    "notify_event_cancelled",
    "notify_event_deleted",
    "notify_event_moderated",
    "notify_event_submitted",
    "notify_registration_created",
    "notify_role_updated",
    "parse_notification_ids",
]
