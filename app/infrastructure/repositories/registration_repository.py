"""Persistence helpers for registrations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Registration
from app.infrastructure.models import RegistrationModel
from app.utils import ensure_naive_utc, ensure_utc


class RegistrationRepository:
    """Provide CRUD operations for :class:`Registration` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, registration_id: int) -> Registration | None:
        model = self.session.get(RegistrationModel, registration_id)
        return self._to_entity(model) if model else None

    def get_by_user_and_event(self, *, user_id: int, event_id: int) -> Registration | None:
        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.user_id == user_id)
            .filter(RegistrationModel.event_id == event_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[Registration]:
        query = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.user_id == user_id)
            .order_by(RegistrationModel.created_at.desc(), RegistrationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_event(self, event_id: int) -> Sequence[Registration]:
        query = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.event_id == event_id)
            .order_by(RegistrationModel.created_at.asc(), RegistrationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_participant_ids(self, event_id: int) -> list[int]:
        query = self.session.query(RegistrationModel.user_id).filter(
            RegistrationModel.event_id == event_id
        )
        return [user_id for (user_id,) in query.all()]

    def create(self, registration: Registration) -> Registration:
        model = RegistrationModel(
            user_id=registration.user_id,
            event_id=registration.event_id,
            qr_code=registration.qr_code,
            check_in=registration.check_in,
            last_scanned_at=ensure_naive_utc(registration.last_scanned_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, registration: Registration) -> Registration:
        model = self.session.get(RegistrationModel, registration.id)
        if model is None:
            msg = f"Registration with id {registration.id} not found"
            raise ValueError(msg)
        model.qr_code = registration.qr_code
        model.check_in = registration.check_in
        model.last_scanned_at = ensure_naive_utc(registration.last_scanned_at)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_for_user(self, user_id: int) -> int:
        count = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return count

    def delete_for_events(self, event_ids: Sequence[int]) -> int:
        if not event_ids:
            return 0
        count = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.event_id.in_(list(event_ids)))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return count

    @staticmethod
    def _to_entity(model: RegistrationModel) -> Registration:
        return Registration(
            id=model.id,
            user_id=model.user_id,
            event_id=model.event_id,
            qr_code=model.qr_code,
            check_in=bool(model.check_in),
            last_scanned_at=ensure_utc(model.last_scanned_at),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["RegistrationRepository"]
