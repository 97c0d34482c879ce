from datetime import date

import pytest
from django.core.exceptions import ValidationError

from hotel.models import Customer, ReservationStatus, RoomStatus, RoomType
from hotel.services import (
    get_reservation,
    list_active_reservations,
    list_available_rooms,
    list_customer_reservations,
    list_reservations,
    list_rooms,
)


pytestmark = pytest.mark.django_db


def test_all_reservations_newest_first(room, make_reservation):
    older = make_reservation(room, date(2024, 3, 1), date(2024, 3, 2))
    newer = make_reservation(room, date(2024, 1, 1), date(2024, 1, 2))

    assert [r.id for r in list_reservations()] == [newer.id, older.id]


def test_customer_reservations_soonest_check_in_first(room, customer, make_reservation):
    late = make_reservation(room, date(2024, 5, 1), date(2024, 5, 3))
    early = make_reservation(room, date(2024, 2, 1), date(2024, 2, 3))
    stranger = Customer.objects.create(
        first_name="Other",
        last_name="Guest",
        email="other@example.com",
        phone_number="9000000009",
        id_proof="DL 123",
    )
    make_reservation(room, date(2024, 3, 1), date(2024, 3, 3), customer=stranger)

    assert [r.id for r in list_customer_reservations(customer.id)] == [early.id, late.id]


def test_active_reservations_excludes_finished_and_cancelled(room, make_reservation):
    checked_in = make_reservation(room, date(2024, 4, 1), date(2024, 4, 3), status=ReservationStatus.CHECKED_IN)
    confirmed = make_reservation(room, date(2024, 6, 1), date(2024, 6, 3))
    make_reservation(room, date(2024, 1, 1), date(2024, 1, 3), status=ReservationStatus.CANCELLED)
    make_reservation(room, date(2024, 2, 1), date(2024, 2, 3), status=ReservationStatus.CHECKED_OUT)

    assert [r.id for r in list_active_reservations()] == [checked_in.id, confirmed.id]


def test_reservation_display_fields_come_from_joins(room, customer, make_reservation):
    reservation = make_reservation(room, date(2024, 1, 10), date(2024, 1, 15))

    loaded = get_reservation(reservation.id)

    assert loaded.customer_name == "Asha Rao"
    assert loaded.room_number == room.room_number
    assert loaded.nights == 5


def test_rooms_ordered_by_number(make_room):
    make_room(room_number="301")
    make_room(room_number="101")
    make_room(room_number="201")

    assert [r.room_number for r in list_rooms()] == ["101", "201", "301"]


def test_available_rooms_filtered_by_status_and_type(make_room):
    suite = make_room(room_number="401", room_type=RoomType.SUITE)
    single = make_room(room_number="102", room_type=RoomType.SINGLE)
    make_room(room_number="402", room_type=RoomType.SUITE, status=RoomStatus.OCCUPIED)
    make_room(room_number="103", room_type=RoomType.SINGLE, status=RoomStatus.MAINTENANCE)

    assert [r.id for r in list_available_rooms()] == [single.id, suite.id]
    assert [r.id for r in list_available_rooms(RoomType.SUITE)] == [suite.id]
    assert list_available_rooms(RoomType.DELUXE) == []


def test_available_rooms_rejects_unknown_type(db):
    with pytest.raises(ValidationError):
        list_available_rooms("PENTHOUSE")
