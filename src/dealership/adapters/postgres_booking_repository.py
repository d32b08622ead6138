"""PostgreSQL implementation of BookingRepository."""

from __future__ import annotations

import logging
from collections.abc import Collection
from datetime import date
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealership.domain.booking import (
    Booking,
    BookingStatus,
    BookingStatusEntry,
    NewBooking,
    SlotAlreadyBookedError,
    rejected_status_change,
)
from dealership.domain.errors import NotFoundError
from dealership.infra.db.errors import store_call
from dealership.infra.db.models.booking import ACTIVE_SLOT_INDEX, BookingRow
from dealership.ports.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def _violated_constraint(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name
    # Drivers without diagnostics: fall back to the message text
    return ACTIVE_SLOT_INDEX if ACTIVE_SLOT_INDEX in str(exc.orig) else None


class PostgresBookingRepository(BookingRepository):
    """
    PostgreSQL implementation of BookingRepository.

    The partial unique index ``uq_test_drive_active_slot`` is the final word
    on double bookings: a violation during INSERT is reported as
    SlotAlreadyBookedError, the same error the use case's pre-check raises.
    Status changes are a single conditional UPDATE, so a racing writer that
    already moved the booking to a terminal status is never overwritten.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, booking_id: str) -> Booking | None:
        key = _parse_uuid(booking_id)
        if key is None:
            return None
        with store_call("bookings.get_by_id"):
            row = self._session.get(BookingRow, key)
        return self._to_domain(row) if row else None

    def find_matching(
        self,
        car_id: str,
        booking_date: date,
        start_time: str,
        statuses: Collection[BookingStatus],
    ) -> list[Booking]:
        key = _parse_uuid(car_id)
        if key is None:
            return []
        query = select(BookingRow).where(
            BookingRow.car_id == key,
            BookingRow.booking_date == booking_date,
            BookingRow.start_time == start_time,
            BookingRow.status.in_([s.value for s in statuses]),
        )
        with store_call("bookings.find_matching"):
            rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def create(self, booking: NewBooking) -> Booking:
        row = BookingRow(
            car_id=UUID(booking.car_id),
            user_id=booking.user_id,
            booking_date=booking.booking_date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=BookingStatus.PENDING.value,
            notes=booking.notes,
        )
        try:
            with store_call("bookings.create"):
                # SAVEPOINT: a constraint violation must not poison the request's transaction
                with self._session.begin_nested():
                    self._session.add(row)
        except IntegrityError as exc:
            constraint = _violated_constraint(exc)
            if constraint == ACTIVE_SLOT_INDEX:
                logger.info(
                    "Slot taken by concurrent booking",
                    extra={"car_id": booking.car_id, "start_time": booking.start_time},
                )
                raise SlotAlreadyBookedError(
                    booking.car_id, booking.booking_date, booking.start_time
                ) from exc
            if constraint and "car_id" in constraint:
                raise NotFoundError(resource="Car", identifier=booking.car_id) from exc
            raise

        return self._to_domain(row)

    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        *,
        expected: Collection[BookingStatus],
    ) -> Booking:
        key = _parse_uuid(booking_id)
        if key is None:
            raise NotFoundError(resource="Booking", identifier=booking_id)
        # Compare-and-set: only a row still in an expected status is touched
        query = (
            update(BookingRow)
            .where(
                BookingRow.id == key,
                BookingRow.status.in_([s.value for s in expected]),
            )
            .values(status=status.value, updated_at=func.now())
            .returning(BookingRow)
        )
        try:
            with store_call("bookings.update_status"):
                with self._session.begin_nested():
                    row = self._session.execute(query).scalar_one_or_none()
        except IntegrityError as exc:
            if _violated_constraint(exc) != ACTIVE_SLOT_INDEX:
                raise
            current = self._reload(booking_id, key)
            logger.info(
                "Slot taken while reactivating booking",
                extra={"booking_id": booking_id, "car_id": current.car_id},
            )
            raise SlotAlreadyBookedError(
                current.car_id, current.booking_date, current.start_time
            ) from exc

        if row is None:
            current = self._reload(booking_id, key)
            raise rejected_status_change(current, status)
        return self._to_domain(row)

    def latest_for_user_and_car(
        self,
        user_id: str,
        car_id: str,
        statuses: Collection[BookingStatus],
    ) -> Booking | None:
        key = _parse_uuid(car_id)
        if key is None:
            return None
        query = (
            select(BookingRow)
            .where(
                BookingRow.user_id == user_id,
                BookingRow.car_id == key,
                BookingRow.status.in_([s.value for s in statuses]),
            )
            .order_by(BookingRow.created_at.desc())
            .limit(1)
        )
        with store_call("bookings.latest_for_user_and_car"):
            row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_for_user(self, user_id: str) -> list[Booking]:
        query = (
            select(BookingRow)
            .where(BookingRow.user_id == user_id)
            .order_by(BookingRow.booking_date.desc(), BookingRow.created_at.desc())
        )
        with store_call("bookings.list_for_user"):
            rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def list_all(self, status: BookingStatus | None = None) -> list[Booking]:
        query = select(BookingRow).order_by(
            BookingRow.booking_date.desc(), BookingRow.created_at.desc()
        )
        if status is not None:
            query = query.where(BookingRow.status == status.value)
        with store_call("bookings.list_all"):
            rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def status_snapshot(self) -> list[BookingStatusEntry]:
        query = select(BookingRow.id, BookingRow.car_id, BookingRow.status)
        with store_call("bookings.snapshot"):
            rows = self._session.execute(query).all()
        return [
            BookingStatusEntry(id=str(row.id), car_id=str(row.car_id), status=BookingStatus(row.status))
            for row in rows
        ]

    def _reload(self, booking_id: str, key: UUID) -> Booking:
        with store_call("bookings.get_by_id"):
            row = self._session.get(BookingRow, key, populate_existing=True)
        if row is None:
            raise NotFoundError(resource="Booking", identifier=booking_id)
        return self._to_domain(row)

    def _to_domain(self, row: BookingRow) -> Booking:
        return Booking(
            id=str(row.id),
            car_id=str(row.car_id),
            user_id=row.user_id,
            booking_date=row.booking_date,
            start_time=row.start_time,
            end_time=row.end_time,
            status=BookingStatus(row.status),
            notes=row.notes,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
