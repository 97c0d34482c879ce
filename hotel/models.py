from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Customer(models.Model):
    id = models.BigAutoField(primary_key=True, db_column="customer_id")
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.CharField(max_length=100, db_index=True)
    phone_number = models.CharField(max_length=15, db_index=True)
    id_proof = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.full_name} <{self.email}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RoomType(models.TextChoices):
    SINGLE = "SINGLE", "Single"
    DOUBLE = "DOUBLE", "Double"
    SUITE = "SUITE", "Suite"
    DELUXE = "DELUXE", "Deluxe"


class RoomStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    OCCUPIED = "OCCUPIED", "Occupied"
    MAINTENANCE = "MAINTENANCE", "Maintenance"


class Room(models.Model):
    id = models.BigAutoField(primary_key=True, db_column="room_id")
    room_number = models.CharField(max_length=10, unique=True)
    room_type = models.CharField(max_length=10, choices=RoomType.choices)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    status = models.CharField(max_length=12, choices=RoomStatus.choices, default=RoomStatus.AVAILABLE)
    floor_number = models.PositiveSmallIntegerField()
    max_occupancy = models.PositiveSmallIntegerField()

    class Meta:
        db_table = "rooms"
        ordering = ["room_number"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_night__gt=0),
                name="room_price_positive",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Room {self.room_number} ({self.get_room_type_display()})"


class ReservationStatus(models.TextChoices):
    CONFIRMED = "CONFIRMED", "Confirmed"
    CHECKED_IN = "CHECKED_IN", "Checked in"
    CHECKED_OUT = "CHECKED_OUT", "Checked out"
    CANCELLED = "CANCELLED", "Cancelled"


# Statuses that hold a room for their date range.
ACTIVE_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN)


class Reservation(models.Model):
    id = models.BigAutoField(primary_key=True, db_column="reservation_id")
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="reservations")
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="reservations")
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=12,
        choices=ReservationStatus.choices,
        default=ReservationStatus.CONFIRMED,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "reservations"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="reservation_checkout_after_checkin",
            )
        ]
        indexes = [
            models.Index(fields=["room", "check_in_date"], name="idx_res_room_checkin"),
            models.Index(fields=["customer", "check_in_date"], name="idx_res_customer_checkin"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"#{self.id} · {self.room_number} · {self.check_in_date} → {self.check_out_date} · {self.status}"

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @property
    def customer_name(self) -> str:
        """
        Read through the joined customer row; never stored on the reservation.
        """
        return self.customer.full_name

    @property
    def room_number(self) -> str:
        return self.room.room_number

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
