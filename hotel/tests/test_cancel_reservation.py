from datetime import timedelta

import pytest

from hotel.models import Reservation, ReservationStatus, RoomStatus
from hotel.services import (
    AlreadyCancelledError,
    CannotCancelCompletedError,
    cancel_reservation,
    create_reservation,
)


pytestmark = pytest.mark.django_db


def test_cancel_is_a_soft_transition_that_releases_the_room(room, booking_input):
    reservation = create_reservation(data=booking_input())

    cancelled = cancel_reservation(reservation_id=reservation.id)

    room.refresh_from_db()
    assert cancelled.status == ReservationStatus.CANCELLED
    assert Reservation.objects.get(id=reservation.id).status == ReservationStatus.CANCELLED
    assert room.status == RoomStatus.AVAILABLE


def test_cancelled_dates_can_be_booked_again(booking_input):
    first = create_reservation(data=booking_input())
    cancel_reservation(reservation_id=first.id)

    second = create_reservation(data=booking_input(email="second@example.com", phone_number="9000000002"))

    assert second.status == ReservationStatus.CONFIRMED


def test_cancelling_twice_reports_already_cancelled_without_changes(room, make_reservation, today):
    reservation = make_reservation(
        room,
        today + timedelta(days=1),
        today + timedelta(days=2),
        status=ReservationStatus.CANCELLED,
    )
    room.status = RoomStatus.OCCUPIED
    room.save(update_fields=["status"])
    updated_at = reservation.updated_at

    with pytest.raises(AlreadyCancelledError):
        cancel_reservation(reservation_id=reservation.id)

    reservation.refresh_from_db()
    room.refresh_from_db()
    assert reservation.updated_at == updated_at
    assert room.status == RoomStatus.OCCUPIED


def test_checked_out_reservation_cannot_be_cancelled(room, make_reservation, today):
    reservation = make_reservation(
        room,
        today - timedelta(days=3),
        today - timedelta(days=1),
        status=ReservationStatus.CHECKED_OUT,
    )

    with pytest.raises(CannotCancelCompletedError):
        cancel_reservation(reservation_id=reservation.id)

    reservation.refresh_from_db()
    assert reservation.status == ReservationStatus.CHECKED_OUT


def test_cancel_checked_in_reservation(room, make_reservation, today):
    reservation = make_reservation(
        room,
        today,
        today + timedelta(days=2),
        status=ReservationStatus.CHECKED_IN,
    )

    assert cancel_reservation(reservation_id=reservation.id).status == ReservationStatus.CANCELLED


def test_cancel_unknown_reservation(db):
    with pytest.raises(Reservation.DoesNotExist):
        cancel_reservation(reservation_id=424242)


def test_cancel_resets_room_even_if_another_booking_is_active(room, make_reservation, today):
    # The room flag is reset unconditionally; other active bookings are not consulted.
    first = make_reservation(room, today + timedelta(days=1), today + timedelta(days=3))
    make_reservation(room, today + timedelta(days=5), today + timedelta(days=7))
    room.status = RoomStatus.OCCUPIED
    room.save(update_fields=["status"])

    cancel_reservation(reservation_id=first.id)

    room.refresh_from_db()
    assert room.status == RoomStatus.AVAILABLE
