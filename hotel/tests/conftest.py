from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from hotel.models import Customer, Reservation, ReservationStatus, Room, RoomStatus, RoomType
from hotel.services import ReservationInput


@pytest.fixture
def today() -> date:
    return timezone.localdate()


@pytest.fixture
def make_room(db):
    counter = {"n": 100}

    def _make_room(**overrides) -> Room:
        counter["n"] += 1
        fields = {
            "room_number": str(counter["n"]),
            "room_type": RoomType.DOUBLE,
            "price_per_night": Decimal("2500.00"),
            "status": RoomStatus.AVAILABLE,
            "floor_number": 1,
            "max_occupancy": 2,
        }
        fields.update(overrides)
        return Room.objects.create(**fields)

    return _make_room


@pytest.fixture
def room(make_room) -> Room:
    return make_room()


@pytest.fixture
def customer(db) -> Customer:
    return Customer.objects.create(
        first_name="Asha",
        last_name="Rao",
        email="asha@example.com",
        phone_number="9876543210",
        id_proof="PAN ABCDE1234F",
    )


@pytest.fixture
def make_reservation(customer):
    """
    Insert a reservation row directly, bypassing the lifecycle rules.
    """

    def _make_reservation(room: Room, check_in: date, check_out: date, **overrides) -> Reservation:
        fields = {
            "customer": customer,
            "room": room,
            "check_in_date": check_in,
            "check_out_date": check_out,
            "total_amount": room.price_per_night * (check_out - check_in).days,
            "status": ReservationStatus.CONFIRMED,
        }
        fields.update(overrides)
        return Reservation.objects.create(**fields)

    return _make_reservation


@pytest.fixture
def booking_input(room, today):
    def _booking_input(**overrides) -> ReservationInput:
        fields = {
            "first_name": "Vikram",
            "last_name": "Singh",
            "email": "vikram@example.com",
            "phone_number": "9123456780",
            "id_proof": "Passport K1234567",
            "room_id": room.id,
            "check_in": today + timedelta(days=1),
            "check_out": today + timedelta(days=4),
        }
        fields.update(overrides)
        return ReservationInput(**fields)

    return _booking_input
