from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction

from .models import Room, RoomType


@dataclass(frozen=True)
class RoomSeed:
    room_number: str
    room_type: str
    price_per_night: Decimal
    floor_number: int
    max_occupancy: int


DEFAULT_ROOMS: list[RoomSeed] = [
    RoomSeed("101", RoomType.SINGLE, Decimal("1500.00"), 1, 1),
    RoomSeed("102", RoomType.SINGLE, Decimal("1500.00"), 1, 1),
    RoomSeed("103", RoomType.DOUBLE, Decimal("2500.00"), 1, 2),
    RoomSeed("201", RoomType.DOUBLE, Decimal("2500.00"), 2, 2),
    RoomSeed("202", RoomType.DOUBLE, Decimal("2800.00"), 2, 3),
    RoomSeed("203", RoomType.DELUXE, Decimal("4000.00"), 2, 3),
    RoomSeed("301", RoomType.DELUXE, Decimal("4500.00"), 3, 3),
    RoomSeed("302", RoomType.SUITE, Decimal("6500.00"), 3, 4),
    RoomSeed("401", RoomType.SUITE, Decimal("8000.00"), 4, 5),
]


def seed_default_rooms(*, update_existing: bool = False) -> dict[str, int]:
    """
    Idempotently seed the default room inventory, keyed by room number.

    - If update_existing is False: creates missing rooms only (does not overwrite edits).
    - If update_existing is True: resets type, price, floor and occupancy to the defaults.
      Room status is never touched so live bookings keep their room occupied.
    """
    created = 0
    updated = 0
    skipped = 0

    with transaction.atomic():
        for seed in DEFAULT_ROOMS:
            defaults = {
                "room_type": seed.room_type,
                "price_per_night": seed.price_per_night,
                "floor_number": seed.floor_number,
                "max_occupancy": seed.max_occupancy,
            }

            if update_existing:
                _, was_created = Room.objects.update_or_create(room_number=seed.room_number, defaults=defaults)
                if was_created:
                    created += 1
                else:
                    updated += 1
            else:
                _, was_created = Room.objects.get_or_create(room_number=seed.room_number, defaults=defaults)
                if was_created:
                    created += 1
                else:
                    skipped += 1

    return {"created": created, "updated": updated, "skipped": skipped}
