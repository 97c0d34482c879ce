from datetime import date

import pytest

from hotel.models import ReservationStatus
from hotel.services import is_room_available, ranges_overlap


@pytest.mark.parametrize(
    "requested, expected",
    [
        ((date(2024, 1, 15), date(2024, 1, 20)), False),  # starts on existing check-out
        ((date(2024, 1, 5), date(2024, 1, 10)), False),  # ends on existing check-in
        ((date(2024, 1, 14), date(2024, 1, 16)), True),  # straddles check-out
        ((date(2024, 1, 8), date(2024, 1, 11)), True),  # straddles check-in
        ((date(2024, 1, 11), date(2024, 1, 13)), True),  # inside
        ((date(2024, 1, 1), date(2024, 1, 31)), True),  # covers
        ((date(2024, 1, 10), date(2024, 1, 15)), True),  # identical
        ((date(2024, 1, 1), date(2024, 1, 3)), False),
        ((date(2024, 1, 20), date(2024, 1, 22)), False),
    ],
)
def test_ranges_overlap_half_open(requested, expected):
    existing = (date(2024, 1, 10), date(2024, 1, 15))

    assert ranges_overlap(*existing, *requested) is expected
    assert ranges_overlap(*requested, *existing) is expected


@pytest.mark.django_db
def test_back_to_back_stay_is_available(room, make_reservation):
    make_reservation(room, date(2024, 1, 10), date(2024, 1, 15))

    assert is_room_available(room.id, date(2024, 1, 15), date(2024, 1, 20)) is True
    assert is_room_available(room.id, date(2024, 1, 5), date(2024, 1, 10)) is True


@pytest.mark.django_db
def test_overlapping_stay_is_unavailable(room, make_reservation):
    make_reservation(room, date(2024, 1, 10), date(2024, 1, 15))

    assert is_room_available(room.id, date(2024, 1, 14), date(2024, 1, 16)) is False
    assert is_room_available(room.id, date(2024, 1, 11), date(2024, 1, 12)) is False
    assert is_room_available(room.id, date(2024, 1, 1), date(2024, 2, 1)) is False


@pytest.mark.django_db
@pytest.mark.parametrize(
    "status, blocks",
    [
        (ReservationStatus.CONFIRMED, True),
        (ReservationStatus.CHECKED_IN, True),
        (ReservationStatus.CHECKED_OUT, False),
        (ReservationStatus.CANCELLED, False),
    ],
)
def test_only_active_reservations_block(room, make_reservation, status, blocks):
    make_reservation(room, date(2024, 1, 10), date(2024, 1, 15), status=status)

    assert is_room_available(room.id, date(2024, 1, 12), date(2024, 1, 13)) is not blocks


@pytest.mark.django_db
def test_other_rooms_do_not_block(make_room, make_reservation):
    booked = make_room()
    free = make_room()
    make_reservation(booked, date(2024, 1, 10), date(2024, 1, 15))

    assert is_room_available(free.id, date(2024, 1, 10), date(2024, 1, 15)) is True


@pytest.mark.django_db
def test_excluded_reservation_is_ignored(room, make_reservation):
    reservation = make_reservation(room, date(2024, 1, 10), date(2024, 1, 15))

    assert is_room_available(room.id, date(2024, 1, 12), date(2024, 1, 14)) is False
    assert is_room_available(
        room.id,
        date(2024, 1, 12),
        date(2024, 1, 14),
        exclude_reservation_id=reservation.id,
    ) is True
