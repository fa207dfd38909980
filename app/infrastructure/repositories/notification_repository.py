"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.domain.entities import (
    Notification,
    NotificationCreateResult,
    NotificationDraft,
)
from app.domain.exceptions import InvalidInputError, StorageUnavailableError
from app.infrastructure.models import NotificationModel
from app.utils import ensure_utc, utc_now_naive

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Store notifications and query them, always scoped to one owner.

    Every read and write filters on ``recipient_id``; callers cannot reach
    another user's records through this class.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # ------------------------------------------------------------------ writes
    def create(self, draft: NotificationDraft) -> Notification:
        validate_draft(draft)
        model = self._draft_to_model(draft)
        with self._storage_errors("create notification"):
            self.session.add(model)
            self.session.flush()
            notification = self._to_entity(model)
            self.session.commit()
        return notification

    def create_many(
        self, drafts: Sequence[NotificationDraft]
    ) -> list[NotificationCreateResult]:
        """Persist every draft independently and report one result per draft.

        All valid drafts are first written in a single transaction. When that
        transaction fails the drafts are retried one by one, so a single bad
        record cannot prevent the others from being stored.
        """

        results: list[NotificationCreateResult | None] = [None] * len(drafts)
        pending: list[tuple[int, NotificationDraft]] = []
        for index, draft in enumerate(drafts):
            try:
                validate_draft(draft)
            except InvalidInputError as exc:
                results[index] = NotificationCreateResult(draft=draft, error=exc)
            else:
                pending.append((index, draft))

        if not pending:
            return [result for result in results if result is not None]

        models = [self._draft_to_model(draft) for _, draft in pending]
        try:
            self.session.add_all(models)
            self.session.flush()
            created = [self._to_entity(model) for model in models]
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning(
                "Bulk insert of %d notifications failed, retrying individually: %s",
                len(pending),
                exc,
            )
            for index, draft in pending:
                results[index] = self._create_isolated(draft)
        else:
            for (index, draft), notification in zip(pending, created):
                results[index] = NotificationCreateResult(
                    draft=draft, notification=notification
                )

        return [result for result in results if result is not None]

    def mark_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        with self._storage_errors("mark notification read"):
            model = (
                self._owned(user_id)
                .filter(NotificationModel.id == notification_id)
                .first()
            )
            if model is None:
                return None
            if not model.read:
                model.read = True
                model.updated_at = utc_now_naive()
                self.session.flush()
            notification = self._to_entity(model)
            self.session.commit()
        return notification

    def mark_many_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = _clean_ids(notification_ids)
        if not ids:
            return 0
        with self._storage_errors("mark notifications read"):
            count = (
                self._owned(user_id)
                .filter(NotificationModel.id.in_(ids))
                .filter(NotificationModel.read.is_(False))
                .update(
                    {
                        NotificationModel.read: True,
                        NotificationModel.updated_at: utc_now_naive(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return count

    def mark_all_read(self, user_id: int) -> int:
        with self._storage_errors("mark all notifications read"):
            count = (
                self._owned(user_id)
                .filter(NotificationModel.read.is_(False))
                .update(
                    {
                        NotificationModel.read: True,
                        NotificationModel.updated_at: utc_now_naive(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return count

    def delete_one(self, notification_id: int, *, user_id: int) -> bool:
        with self._storage_errors("delete notification"):
            count = (
                self._owned(user_id)
                .filter(NotificationModel.id == notification_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return count > 0

    def delete_many(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = _clean_ids(notification_ids)
        if not ids:
            return 0
        with self._storage_errors("delete notifications"):
            count = (
                self._owned(user_id)
                .filter(NotificationModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return count

    def delete_by_filter(self, user_id: int, *, read_only: bool = False) -> int:
        with self._storage_errors("clear notifications"):
            query = self._owned(user_id)
            if read_only:
                query = query.filter(NotificationModel.read.is_(True))
            count = query.delete(synchronize_session=False)
            self.session.commit()
        return count

    def delete_for_user(self, user_id: int) -> int:
        """Remove every notification owned by ``user_id`` (account removal)."""

        return self.delete_by_filter(user_id)

    # ------------------------------------------------------------------- reads
    def query(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        link_type: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[Notification], int]:
        """Return one newest-first slice of the feed and the filtered total."""

        with self._storage_errors("query notifications"):
            query = self._owned(user_id)
            if read is not None:
                query = query.filter(NotificationModel.read.is_(read))
            if link_type:
                query = query.filter(NotificationModel.link_type == link_type)
            total = query.count()
            query = query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            notifications = [self._to_entity(model) for model in query.all()]
        return notifications, total

    def count_unread(self, user_id: int) -> int:
        with self._storage_errors("count unread notifications"):
            return (
                self._owned(user_id)
                .filter(NotificationModel.read.is_(False))
                .count()
            )

    # ----------------------------------------------------------------- helpers
    def _owned(self, user_id: int) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == user_id
        )

    def _create_isolated(self, draft: NotificationDraft) -> NotificationCreateResult:
        try:
            notification = self.create(draft)
        except StorageUnavailableError as exc:
            return NotificationCreateResult(draft=draft, error=exc)
        return NotificationCreateResult(draft=draft, notification=notification)

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Storage failure during %s", operation)
            raise StorageUnavailableError("Notification storage unavailable") from exc

    @staticmethod
    def _draft_to_model(draft: NotificationDraft) -> NotificationModel:
        now = utc_now_naive()
        return NotificationModel(
            recipient_id=draft.recipient_id,
            title=draft.title.strip(),
            message=draft.message.strip(),
            read=False,
            link_type=draft.link_type or "",
            link_id=draft.link_id or "",
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            title=model.title,
            message=model.message,
            read=bool(model.read),
            link_type=model.link_type or "",
            link_id=model.link_id or "",
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


def validate_draft(draft: NotificationDraft) -> None:
    """Raise :class:`InvalidInputError` when ``draft`` cannot be stored."""

    if isinstance(draft.recipient_id, bool) or not isinstance(draft.recipient_id, int):
        raise InvalidInputError("Notification recipient must be a user id")
    if draft.recipient_id <= 0:
        raise InvalidInputError("Notification recipient must be a user id")
    if not isinstance(draft.title, str) or not draft.title.strip():
        raise InvalidInputError("Notification title is required")
    if not isinstance(draft.message, str) or not draft.message.strip():
        raise InvalidInputError("Notification message is required")
    if bool(draft.link_type) != bool(draft.link_id):
        raise InvalidInputError("link_type and link_id must be provided together")


def _clean_ids(notification_ids: Iterable[int]) -> list[int]:
    return list({int(value) for value in notification_ids if value is not None})


__all__ = ["NotificationRepository", "validate_draft"]
