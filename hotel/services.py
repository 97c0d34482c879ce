from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as date_type
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .models import (
    ACTIVE_STATUSES,
    Customer,
    Reservation,
    ReservationStatus,
    Room,
    RoomStatus,
    RoomType,
)


logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


class ReservationError(Exception):
    """Base error type for reservation domain errors."""


class RoomUnavailableError(ReservationError):
    """Raised when the room is not bookable or already booked for the requested dates."""


class AlreadyCancelledError(ReservationError):
    """Raised when cancelling a reservation that is already cancelled."""


class CannotCancelCompletedError(ReservationError):
    """Raised when cancelling a reservation whose guest already checked out."""


class InvalidStatusTransitionError(ReservationError):
    """Raised when a status change is not allowed from the current status."""


@dataclass(frozen=True)
class ReservationInput:
    first_name: str
    last_name: str
    email: str
    phone_number: str
    id_proof: str
    room_id: int
    check_in: date_type
    check_out: date_type


def ranges_overlap(start_a: date_type, end_a: date_type, start_b: date_type, end_b: date_type) -> bool:
    """
    Half-open interval overlap: [start_a, end_a) and [start_b, end_b).
    Ranges that only touch at a boundary do not overlap.
    """
    return start_a < end_b and end_a > start_b


def nights_between(check_in: date_type, check_out: date_type) -> int:
    return (check_out - check_in).days


def compute_total_amount(price_per_night: Decimal, check_in: date_type, check_out: date_type) -> Decimal:
    return price_per_night * nights_between(check_in, check_out)


def _validate_names(first_name: str, last_name: str) -> None:
    if not (first_name or "").strip() or not (last_name or "").strip():
        raise ValidationError({"name": "Name cannot be empty."})


def _validate_email(email: str) -> None:
    if not email or not EMAIL_PATTERN.match(email):
        raise ValidationError({"email": "Invalid email format."})


def _validate_phone(phone_number: str) -> None:
    if not phone_number or not PHONE_PATTERN.match(phone_number):
        raise ValidationError({"phone_number": "Invalid phone number (must be 10 digits)."})


def _validate_date_range(check_in: date_type, check_out: date_type) -> None:
    if check_out <= check_in:
        raise ValidationError({"check_out": "Check-out date must be after check-in date."})


def _validate_not_past(check_in: date_type) -> None:
    if check_in < timezone.localdate():
        raise ValidationError({"check_in": "Check-in date cannot be in the past."})


def _conflicting_reservations(room_id: int, check_in: date_type, check_out: date_type):
    return Reservation.objects.filter(
        room_id=room_id,
        status__in=ACTIVE_STATUSES,
        check_in_date__lt=check_out,
        check_out_date__gt=check_in,
    )


def is_room_available(
    room_id: int,
    check_in: date_type,
    check_out: date_type,
    *,
    exclude_reservation_id: int | None = None,
) -> bool:
    """
    True if no active reservation for the room overlaps [check_in, check_out).
    Only reservations, not the room's status flag, are consulted.
    """
    conflicts = _conflicting_reservations(room_id, check_in, check_out)
    if exclude_reservation_id is not None:
        conflicts = conflicts.exclude(id=exclude_reservation_id)
    return not conflicts.exists()


def resolve_customer(
    *,
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str,
    id_proof: str,
) -> tuple[Customer, bool]:
    """
    Find an existing customer by email, then by phone; otherwise create one.
    Returns (customer, created).
    """
    customer = Customer.objects.filter(email=email).order_by("id").first()
    if customer is None:
        customer = Customer.objects.filter(phone_number=phone_number).order_by("id").first()
    if customer is not None:
        return customer, False

    customer = Customer.objects.create(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        id_proof=id_proof,
    )
    return customer, True


def create_reservation(*, data: ReservationInput) -> Reservation:
    """
    Create a reservation:
    - Validates input before touching the store.
    - Locks the room row, then checks its status flag and the date overlap.
    - Customer resolution, the reservation insert and the room status update
      commit together or not at all.
    """
    first_name = (data.first_name or "").strip()
    last_name = (data.last_name or "").strip()
    email = (data.email or "").strip()
    phone_number = (data.phone_number or "").strip()

    _validate_names(first_name, last_name)
    _validate_email(email)
    _validate_phone(phone_number)
    _validate_date_range(data.check_in, data.check_out)
    _validate_not_past(data.check_in)

    with transaction.atomic():
        room = Room.objects.select_for_update().get(id=data.room_id)

        if room.status != RoomStatus.AVAILABLE:
            raise RoomUnavailableError(f"Room {room.room_number} is not available.")

        if not is_room_available(room.id, data.check_in, data.check_out):
            raise RoomUnavailableError(f"Room {room.room_number} is already booked for the selected dates.")

        customer, created = resolve_customer(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone_number,
            id_proof=(data.id_proof or "").strip(),
        )
        if created:
            logger.info("Created customer %s for %s", customer.id, email)

        reservation = Reservation.objects.create(
            customer=customer,
            room=room,
            check_in_date=data.check_in,
            check_out_date=data.check_out,
            total_amount=compute_total_amount(room.price_per_night, data.check_in, data.check_out),
            status=ReservationStatus.CONFIRMED,
        )

        room.status = RoomStatus.OCCUPIED
        room.save(update_fields=["status"])

    logger.info(
        "Reservation %s confirmed: room %s, %s to %s, total %s",
        reservation.id,
        room.room_number,
        reservation.check_in_date,
        reservation.check_out_date,
        reservation.total_amount,
    )
    return reservation


def cancel_reservation(*, reservation_id: int) -> Reservation:
    """
    Soft-cancel a reservation and release its room.
    The room is reset to AVAILABLE without consulting other reservations.
    """
    with transaction.atomic():
        reservation = (
            Reservation.objects.select_for_update()
            .select_related("room", "customer")
            .get(id=reservation_id)
        )

        if reservation.status == ReservationStatus.CANCELLED:
            raise AlreadyCancelledError("Reservation is already cancelled.")
        if reservation.status == ReservationStatus.CHECKED_OUT:
            raise CannotCancelCompletedError("Cannot cancel a completed reservation.")

        reservation.status = ReservationStatus.CANCELLED
        reservation.save(update_fields=["status", "updated_at"])

        Room.objects.filter(id=reservation.room_id).update(status=RoomStatus.AVAILABLE)
        reservation.room.status = RoomStatus.AVAILABLE

    logger.info("Reservation %s cancelled; room %s released", reservation.id, reservation.room_number)
    return reservation


# current status -> statuses reachable through update_reservation_status
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED}),
    ReservationStatus.CHECKED_IN: frozenset({ReservationStatus.CHECKED_OUT, ReservationStatus.CANCELLED}),
    ReservationStatus.CHECKED_OUT: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


def update_reservation_status(*, reservation_id: int, new_status: str) -> Reservation:
    """
    Move a reservation along CONFIRMED -> CHECKED_IN -> CHECKED_OUT.
    Cancellation goes through cancel_reservation so its rules apply.
    Checking out releases the room.
    """
    try:
        new_status = ReservationStatus(new_status)
    except ValueError as exc:
        raise ValidationError({"status": f"Unknown reservation status: {new_status}."}) from exc

    if new_status == ReservationStatus.CANCELLED:
        return cancel_reservation(reservation_id=reservation_id)

    with transaction.atomic():
        reservation = (
            Reservation.objects.select_for_update()
            .select_related("room", "customer")
            .get(id=reservation_id)
        )

        current = ReservationStatus(reservation.status)
        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(
                f"Cannot change reservation status from {current.label} to {new_status.label}."
            )

        reservation.status = new_status
        reservation.save(update_fields=["status", "updated_at"])

        if new_status == ReservationStatus.CHECKED_OUT:
            Room.objects.filter(id=reservation.room_id).update(status=RoomStatus.AVAILABLE)
            reservation.room.status = RoomStatus.AVAILABLE

    logger.info("Reservation %s moved from %s to %s", reservation.id, current, new_status)
    return reservation


def _with_display_fields(queryset):
    return queryset.select_related("customer", "room")


def get_reservation(reservation_id: int) -> Reservation:
    return _with_display_fields(Reservation.objects.all()).get(id=reservation_id)


def get_room(room_id: int) -> Room:
    return Room.objects.get(id=room_id)


def list_reservations() -> list[Reservation]:
    """
    All reservations, newest first.
    """
    return list(_with_display_fields(Reservation.objects.all()).order_by("-created_at", "-id"))


def list_customer_reservations(customer_id: int) -> list[Reservation]:
    """
    A customer's reservations, soonest check-in first.
    """
    return list(
        _with_display_fields(Reservation.objects.filter(customer_id=customer_id)).order_by("check_in_date", "id")
    )


def list_active_reservations() -> list[Reservation]:
    """
    CONFIRMED and CHECKED_IN reservations, soonest check-in first.
    """
    return list(
        _with_display_fields(Reservation.objects.filter(status__in=ACTIVE_STATUSES)).order_by("check_in_date", "id")
    )


def list_rooms() -> list[Room]:
    return list(Room.objects.order_by("room_number"))


def list_available_rooms(room_type: str | None = None) -> list[Room]:
    rooms = Room.objects.filter(status=RoomStatus.AVAILABLE)
    if room_type:
        if room_type not in RoomType.values:
            raise ValidationError({"room_type": f"Unknown room type: {room_type}."})
        rooms = rooms.filter(room_type=room_type)
    return list(rooms.order_by("room_number"))
