from __future__ import annotations

import logging
from datetime import date as date_type

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connection
from django.utils import timezone

from hotel.models import Reservation, Room, RoomType
from hotel.services import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    AlreadyCancelledError,
    CannotCancelCompletedError,
    ReservationInput,
    RoomUnavailableError,
    cancel_reservation,
    create_reservation,
    get_reservation,
    get_room,
    list_available_rooms,
    list_reservations,
)


logger = logging.getLogger(__name__)

RULE = "=" * 100
MENU = (
    ("1", "View Available Rooms"),
    ("2", "View Available Rooms by Type"),
    ("3", "Create New Reservation"),
    ("4", "View All Reservations"),
    ("5", "View Reservation by ID"),
    ("6", "Cancel Reservation"),
    ("7", "Exit"),
)


def _truncate(value: str, length: int) -> str:
    return value if len(value) <= length else value[: length - 3] + "..."


class Command(BaseCommand):
    help = "Interactive operator console for rooms and reservations."

    def handle(self, *args, **options):
        self.stdout.write("Testing database connection...")
        try:
            connection.ensure_connection()
        except DatabaseError as exc:
            raise CommandError(
                f"Failed to connect to the database: {exc}. "
                "Check that the database server is running and the credentials in .env are correct."
            ) from exc
        self.stdout.write(self.style.SUCCESS("Database connected successfully."))

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write("    WELCOME TO HOTEL RESERVATION MANAGEMENT SYSTEM")
        self.stdout.write("=" * 60)

        actions = {
            "1": self.show_available_rooms,
            "2": self.show_available_rooms_by_type,
            "3": self.create_reservation,
            "4": self.show_all_reservations,
            "5": self.show_reservation,
            "6": self.cancel_reservation,
        }

        while True:
            self._print_menu()
            choice = self._ask("Enter your choice: ")
            if choice is None or choice == "7":
                break
            action = actions.get(choice)
            if action is None:
                self.stdout.write(self.style.ERROR("Invalid choice! Please enter a number between 1 and 7."))
                continue
            try:
                action()
            except DatabaseError:
                logger.exception("Store failure in console action %s", choice)
                self.stdout.write(self.style.ERROR("The reservation store is unavailable. Please try again."))

        self.stdout.write("\nThank you for using Hotel Reservation System!")

    def _print_menu(self) -> None:
        self.stdout.write("\n" + "-" * 60)
        self.stdout.write("MAIN MENU")
        self.stdout.write("-" * 60)
        for key, label in MENU:
            self.stdout.write(f"{key}. {label}")
        self.stdout.write("-" * 60)

    def _ask(self, prompt: str) -> str | None:
        try:
            return input(prompt).strip()
        except EOFError:
            return None

    def _ask_required(self, prompt: str) -> str:
        value = self._ask(prompt)
        if value is None:
            raise CommandError("Input closed.")
        return value

    def _ask_int(self, prompt: str) -> int:
        while True:
            value = self._ask_required(prompt)
            if value.isdecimal():
                return int(value)
            self.stdout.write(self.style.ERROR("Invalid input! Please enter a valid number."))

    def _ask_matching(self, prompt: str, pattern, error: str) -> str:
        while True:
            value = self._ask_required(prompt)
            if pattern.match(value):
                return value
            self.stdout.write(self.style.ERROR(error))

    def _ask_date(self, prompt: str, *, after: date_type | None = None) -> date_type:
        while True:
            value = self._ask_required(prompt)
            try:
                parsed = date_type.fromisoformat(value)
            except ValueError:
                self.stdout.write(self.style.ERROR("Invalid date format! Use YYYY-MM-DD (e.g., 2024-12-25)"))
                continue
            if after is None and parsed < timezone.localdate():
                self.stdout.write(self.style.ERROR("Check-in date cannot be in the past!"))
                continue
            if after is not None and parsed <= after:
                self.stdout.write(self.style.ERROR("Check-out date must be after check-in date!"))
                continue
            return parsed

    def _print_rooms(self, rooms: list[Room], empty_message: str) -> None:
        if not rooms:
            self.stdout.write(f"\n{empty_message}")
            return
        self.stdout.write("\n" + RULE)
        self.stdout.write(
            f"{'ID':<8} {'Room No':<12} {'Type':<12} {'Price/Night':<15} {'Floor':<10} {'Capacity':<12}"
        )
        self.stdout.write(RULE)
        for room in rooms:
            self.stdout.write(
                f"{room.id:<8} {room.room_number:<12} {room.get_room_type_display():<12} "
                f"{'₹' + str(room.price_per_night):<15} {room.floor_number:<10} {room.max_occupancy:<12}"
            )
        self.stdout.write(RULE)

    def show_available_rooms(self) -> None:
        self.stdout.write("\n>>> AVAILABLE ROOMS <<<")
        self._print_rooms(list_available_rooms(), "No available rooms at the moment.")

    def show_available_rooms_by_type(self) -> None:
        self.stdout.write("\n>>> AVAILABLE ROOMS BY TYPE <<<")
        self.stdout.write("\nRoom Types:")
        types = list(RoomType)
        for index, room_type in enumerate(types, start=1):
            self.stdout.write(f"{index}. {room_type.value}")
        choice = self._ask_int("Select room type: ")
        if not 1 <= choice <= len(types):
            self.stdout.write(self.style.ERROR("Invalid room type!"))
            return
        room_type = types[choice - 1]
        self._print_rooms(
            list_available_rooms(room_type.value),
            f"No available {room_type.value} rooms at the moment.",
        )

    def create_reservation(self) -> None:
        self.stdout.write("\n>>> CREATE NEW RESERVATION <<<")
        self.show_available_rooms()

        self.stdout.write("\n--- Customer Information ---")
        first_name = self._ask_required("First Name: ")
        last_name = self._ask_required("Last Name: ")
        email = self._ask_matching("Email: ", EMAIL_PATTERN, "Invalid email format! Please try again.")
        phone_number = self._ask_matching(
            "Phone Number (10 digits): ",
            PHONE_PATTERN,
            "Invalid phone number! Must be 10 digits.",
        )
        id_proof = self._ask_required("ID Proof (Aadhaar/PAN/Passport): ")

        self.stdout.write("\n--- Booking Information ---")
        room_id = self._ask_int("Enter Room ID: ")
        try:
            get_room(room_id)
        except Room.DoesNotExist:
            self.stdout.write(self.style.ERROR(f"\nError: Room with ID {room_id} not found!"))
            return

        check_in = self._ask_date("Check-In Date (YYYY-MM-DD): ")
        check_out = self._ask_date("Check-Out Date (YYYY-MM-DD): ", after=check_in)

        self.stdout.write("\nProcessing reservation...")
        try:
            reservation = create_reservation(
                data=ReservationInput(
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    phone_number=phone_number,
                    id_proof=id_proof,
                    room_id=room_id,
                    check_in=check_in,
                    check_out=check_out,
                )
            )
        except ValidationError as exc:
            for message in exc.messages:
                self.stdout.write(self.style.ERROR(f"Error: {message}"))
            return
        except Room.DoesNotExist:
            self.stdout.write(self.style.ERROR("Error: Room not found"))
            return
        except RoomUnavailableError as exc:
            self.stdout.write(self.style.ERROR(f"Error: {exc}"))
            return

        self.stdout.write(self.style.SUCCESS("\nReservation created successfully!"))
        self.stdout.write(f"Reservation ID: {reservation.id}")
        self.stdout.write(f"Room Number: {reservation.room_number}")
        self.stdout.write(f"Total Amount: ₹{reservation.total_amount} for {reservation.nights} night(s)")

    def show_all_reservations(self) -> None:
        self.stdout.write("\n>>> ALL RESERVATIONS <<<")
        reservations = list_reservations()
        if not reservations:
            self.stdout.write("\nNo reservations found.")
            return

        rule = "=" * 120
        self.stdout.write("\n" + rule)
        self.stdout.write(
            f"{'ID':<8} {'Customer':<20} {'Room':<12} {'Check-In':<12} {'Check-Out':<12} {'Amount':<12} {'Status':<15}"
        )
        self.stdout.write(rule)
        for r in reservations:
            self.stdout.write(
                f"{r.id:<8} {_truncate(r.customer_name, 20):<20} {r.room_number:<12} "
                f"{r.check_in_date.isoformat():<12} {r.check_out_date.isoformat():<12} "
                f"{'₹' + str(r.total_amount):<12} {r.status:<15}"
            )
        self.stdout.write(rule)

    def _print_reservation(self, reservation: Reservation) -> None:
        rule = "=" * 60
        self.stdout.write("\n" + rule)
        self.stdout.write("RESERVATION DETAILS")
        self.stdout.write(rule)
        self.stdout.write(f"Reservation ID    : {reservation.id}")
        self.stdout.write(f"Customer Name     : {reservation.customer_name}")
        self.stdout.write(f"Room Number       : {reservation.room_number}")
        self.stdout.write(f"Check-In Date     : {reservation.check_in_date.isoformat()}")
        self.stdout.write(f"Check-Out Date    : {reservation.check_out_date.isoformat()}")
        self.stdout.write(f"Number of Nights  : {reservation.nights}")
        self.stdout.write(f"Total Amount      : ₹{reservation.total_amount}")
        self.stdout.write(f"Status            : {reservation.get_status_display()}")
        self.stdout.write(f"Created At        : {timezone.localtime(reservation.created_at):%Y-%m-%d %H:%M}")
        self.stdout.write(rule)

    def show_reservation(self) -> None:
        self.stdout.write("\n>>> VIEW RESERVATION <<<")
        reservation_id = self._ask_int("Enter Reservation ID: ")
        try:
            reservation = get_reservation(reservation_id)
        except Reservation.DoesNotExist:
            self.stdout.write(f"\nReservation not found with ID: {reservation_id}")
            return
        self._print_reservation(reservation)

    def cancel_reservation(self) -> None:
        self.stdout.write("\n>>> CANCEL RESERVATION <<<")
        reservation_id = self._ask_int("Enter Reservation ID to cancel: ")

        confirmation = self._ask_required("Are you sure you want to cancel? (yes/no): ")
        if confirmation.lower() != "yes":
            self.stdout.write("Cancellation aborted.")
            return

        try:
            reservation = cancel_reservation(reservation_id=reservation_id)
        except Reservation.DoesNotExist:
            self.stdout.write(f"\nReservation not found with ID: {reservation_id}")
            return
        except (AlreadyCancelledError, CannotCancelCompletedError) as exc:
            self.stdout.write(self.style.WARNING(f"\n{exc}"))
            return

        self.stdout.write(self.style.SUCCESS("\nReservation cancelled successfully!"))
        self.stdout.write(f"Reservation ID: {reservation.id}")
        self.stdout.write(f"Room {reservation.room_number} is now available.")
