"""Persistence helpers for events."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Event
from app.infrastructure.models import EventModel
from app.utils import ensure_naive_utc, ensure_utc


class EventRepository:
    """Provide CRUD operations for :class:`Event` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def list_approved(self) -> Sequence[Event]:
        query = (
            self.session.query(EventModel)
            .filter(EventModel.is_approved.is_(True))
            .order_by(EventModel.date.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_all(self) -> Sequence[Event]:
        query = self.session.query(EventModel).order_by(
            EventModel.created_at.desc(), EventModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_organizer(self, organizer_id: int) -> Sequence[Event]:
        query = (
            self.session.query(EventModel)
            .filter(EventModel.organizer_id == organizer_id)
            .order_by(EventModel.date.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, event: Event) -> Event:
        model = EventModel()
        self._apply_entity_to_model(model, event)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, event: Event) -> Event:
        if event.id is None:
            raise ValueError("Event id is required for updates")
        model = self.session.get(EventModel, event.id)
        if model is None:
            msg = f"Event with id {event.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, event)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_many(self, event_ids: Sequence[int]) -> int:
        if not event_ids:
            return 0
        count = (
            self.session.query(EventModel)
            .filter(EventModel.id.in_(list(event_ids)))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return count

    @staticmethod
    def _apply_entity_to_model(model: EventModel, event: Event) -> None:
        model.title = event.title
        model.description = event.description
        model.location = event.location or ""
        model.date = ensure_naive_utc(event.date)
        model.category = event.category
        model.organizer_id = event.organizer_id
        model.is_paid = event.is_paid
        model.price = event.price if event.is_paid else 0.0
        model.is_approved = event.is_approved
        model.is_cancelled = event.is_cancelled
        model.cancel_reason = event.cancel_reason or ""

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            title=model.title,
            description=model.description,
            location=model.location or "",
            date=ensure_utc(model.date),
            category=model.category,
            organizer_id=model.organizer_id,
            is_paid=bool(model.is_paid),
            price=model.price or 0.0,
            is_approved=bool(model.is_approved),
            is_cancelled=bool(model.is_cancelled),
            cancel_reason=model.cancel_reason or "",
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["EventRepository"]
