# Generated manually (initial migration).
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(db_column="customer_id", primary_key=True, serialize=False)),
                ("first_name", models.CharField(max_length=50)),
                ("last_name", models.CharField(max_length=50)),
                ("email", models.CharField(db_index=True, max_length=100)),
                ("phone_number", models.CharField(db_index=True, max_length=15)),
                ("id_proof", models.CharField(max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(db_column="room_id", primary_key=True, serialize=False)),
                ("room_number", models.CharField(max_length=10, unique=True)),
                (
                    "room_type",
                    models.CharField(
                        choices=[
                            ("SINGLE", "Single"),
                            ("DOUBLE", "Double"),
                            ("SUITE", "Suite"),
                            ("DELUXE", "Deluxe"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("AVAILABLE", "Available"),
                            ("OCCUPIED", "Occupied"),
                            ("MAINTENANCE", "Maintenance"),
                        ],
                        default="AVAILABLE",
                        max_length=12,
                    ),
                ),
                ("floor_number", models.PositiveSmallIntegerField()),
                ("max_occupancy", models.PositiveSmallIntegerField()),
            ],
            options={
                "db_table": "rooms",
                "ordering": ["room_number"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("price_per_night__gt", 0)),
                        name="room_price_positive",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(db_column="reservation_id", primary_key=True, serialize=False)),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("CONFIRMED", "Confirmed"),
                            ("CHECKED_IN", "Checked in"),
                            ("CHECKED_OUT", "Checked out"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="CONFIRMED",
                        max_length=12,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="hotel.customer",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="hotel.room",
                    ),
                ),
            ],
            options={
                "db_table": "reservations",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out_date__gt", models.F("check_in_date"))),
                        name="reservation_checkout_after_checkin",
                    )
                ],
            },
        ),
        migrations.AddIndex(
            model_name="reservation",
            index=models.Index(fields=["room", "check_in_date"], name="idx_res_room_checkin"),
        ),
        migrations.AddIndex(
            model_name="reservation",
            index=models.Index(fields=["customer", "check_in_date"], name="idx_res_customer_checkin"),
        ),
    ]
