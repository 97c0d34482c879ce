from __future__ import annotations

import json
import logging
from datetime import date as date_type

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_GET
from django.views.decorators.http import require_POST

from .models import Reservation, Room
from .services import (
    AlreadyCancelledError,
    CannotCancelCompletedError,
    InvalidStatusTransitionError,
    ReservationInput,
    RoomUnavailableError,
    cancel_reservation,
    create_reservation,
    get_reservation,
    is_room_available,
    list_active_reservations,
    list_available_rooms,
    list_customer_reservations,
    list_reservations,
    list_rooms,
    update_reservation_status,
)


logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "The reservation store is unavailable. Please try again."


def _parse_date(value: str) -> date_type:
    return date_type.fromisoformat(value)


def _parse_id(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def _auth_error(request) -> JsonResponse | None:
    if not request.user.is_authenticated:
        return JsonResponse({"error": "Authentication required."}, status=401)
    if not request.user.is_staff:
        return JsonResponse({"error": "Staff access required."}, status=403)
    return None


def _load_json(request) -> dict | None:
    try:
        payload = json.loads(request.body.decode("utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _room_payload(room: Room) -> dict:
    return {
        "id": room.id,
        "room_number": room.room_number,
        "room_type": room.room_type,
        "price_per_night": str(room.price_per_night),
        "status": room.status,
        "floor_number": room.floor_number,
        "max_occupancy": room.max_occupancy,
    }


def _reservation_payload(reservation: Reservation) -> dict:
    return {
        "id": reservation.id,
        "customer_id": reservation.customer_id,
        "customer_name": reservation.customer_name,
        "room_id": reservation.room_id,
        "room_number": reservation.room_number,
        "check_in_date": reservation.check_in_date.isoformat(),
        "check_out_date": reservation.check_out_date.isoformat(),
        "nights": reservation.nights,
        "total_amount": str(reservation.total_amount),
        "status": reservation.status,
        "created_at": reservation.created_at.isoformat(),
        "updated_at": reservation.updated_at.isoformat(),
    }


def _store_error(action: str) -> JsonResponse:
    logger.exception("Store failure while %s", action)
    return JsonResponse({"error": STORE_ERROR_MESSAGE}, status=503)


@require_GET
def rooms_api(request):
    """
    GET /api/rooms/[?available=1][&room_type=SUITE]
    """
    denied = _auth_error(request)
    if denied is not None:
        return denied

    only_available = request.GET.get("available", "").strip() == "1"
    room_type = request.GET.get("room_type", "").strip().upper() or None

    try:
        if only_available or room_type:
            rooms = list_available_rooms(room_type)
        else:
            rooms = list_rooms()
    except ValidationError as exc:
        return JsonResponse({"error": "Validation error.", "details": exc.message_dict}, status=400)
    except DatabaseError:
        return _store_error("listing rooms")

    return JsonResponse({"rooms": [_room_payload(room) for room in rooms]})


@require_GET
def availability_api(request):
    """
    GET /api/availability/?room_id=1&check_in=YYYY-MM-DD&check_out=YYYY-MM-DD[&exclude_reservation_id=7]

    Date-range availability only; the room's status flag is reported alongside.
    exclude_reservation_id leaves one booking out, for checking a date change
    against the room's other reservations.
    """
    denied = _auth_error(request)
    if denied is not None:
        return denied

    room_id = _parse_id(request.GET.get("room_id", ""))
    if room_id is None:
        return JsonResponse({"error": "room_id must be an integer."}, status=400)

    exclude_reservation_id = None
    raw_exclude = request.GET.get("exclude_reservation_id", "")
    if raw_exclude:
        exclude_reservation_id = _parse_id(raw_exclude)
        if exclude_reservation_id is None:
            return JsonResponse({"error": "exclude_reservation_id must be an integer."}, status=400)

    try:
        check_in = _parse_date(request.GET.get("check_in", "").strip())
        check_out = _parse_date(request.GET.get("check_out", "").strip())
    except ValueError:
        return JsonResponse({"error": "Invalid date. Expected YYYY-MM-DD."}, status=400)

    if check_out <= check_in:
        return JsonResponse({"error": "check_out must be after check_in."}, status=400)

    try:
        room = Room.objects.get(id=room_id)
        available = is_room_available(
            room.id, check_in, check_out, exclude_reservation_id=exclude_reservation_id
        )
    except Room.DoesNotExist:
        return JsonResponse({"error": "Room not found."}, status=404)
    except DatabaseError:
        return _store_error("checking availability")

    return JsonResponse(
        {
            "room_id": room.id,
            "room_number": room.room_number,
            "room_status": room.status,
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
            "available": available,
        }
    )


def _list_reservations(request):
    """
    GET /api/reservations/[?scope=active][&customer_id=123]
    """
    scope = request.GET.get("scope", "all").strip() or "all"
    customer_id_str = request.GET.get("customer_id", "").strip()

    if scope not in ("all", "active"):
        return JsonResponse({"error": "scope must be 'all' or 'active'."}, status=400)

    try:
        if customer_id_str:
            customer_id = _parse_id(customer_id_str)
            if customer_id is None:
                return JsonResponse({"error": "Invalid customer_id. Expected an integer."}, status=400)
            reservations = list_customer_reservations(customer_id)
        elif scope == "active":
            reservations = list_active_reservations()
        else:
            reservations = list_reservations()
    except DatabaseError:
        return _store_error("listing reservations")

    return JsonResponse({"reservations": [_reservation_payload(r) for r in reservations]})


def _create_reservation(request):
    """
    POST /api/reservations/
    Payload (JSON):
      - first_name, last_name, email, phone_number, id_proof: str
      - room_id: int
      - check_in, check_out: YYYY-MM-DD
    """
    payload = _load_json(request)
    if payload is None:
        return JsonResponse({"error": "Invalid JSON payload."}, status=400)

    room_id = _parse_id(payload.get("room_id"))
    check_in_str = str(payload.get("check_in") or "").strip()
    check_out_str = str(payload.get("check_out") or "").strip()

    if room_id is None:
        return JsonResponse({"error": "room_id must be an integer."}, status=400)
    if not check_in_str or not check_out_str:
        return JsonResponse({"error": "check_in and check_out are required."}, status=400)

    try:
        check_in = _parse_date(check_in_str)
        check_out = _parse_date(check_out_str)
    except ValueError:
        return JsonResponse({"error": "Invalid date. Expected YYYY-MM-DD."}, status=400)

    data = ReservationInput(
        first_name=str(payload.get("first_name") or ""),
        last_name=str(payload.get("last_name") or ""),
        email=str(payload.get("email") or ""),
        phone_number=str(payload.get("phone_number") or ""),
        id_proof=str(payload.get("id_proof") or ""),
        room_id=room_id,
        check_in=check_in,
        check_out=check_out,
    )

    try:
        reservation = create_reservation(data=data)
    except ValidationError as exc:
        logger.info("Reservation rejected: %s", exc.message_dict)
        return JsonResponse({"error": "Validation error.", "details": exc.message_dict}, status=400)
    except Room.DoesNotExist:
        return JsonResponse({"error": "Room not found."}, status=404)
    except RoomUnavailableError as exc:
        logger.info("Reservation rejected for room %s: %s", room_id, exc)
        return JsonResponse({"error": str(exc)}, status=409)
    except DatabaseError:
        return _store_error("creating a reservation")

    return JsonResponse(
        {
            "success": True,
            "reservation_id": reservation.id,
            "customer_id": reservation.customer_id,
            "room_number": reservation.room_number,
            "nights": reservation.nights,
            "total_amount": str(reservation.total_amount),
            "message": "Reservation created successfully.",
        },
        status=201,
    )


def reservations_api(request):
    denied = _auth_error(request)
    if denied is not None:
        return denied
    if request.method == "GET":
        return _list_reservations(request)
    if request.method == "POST":
        return _create_reservation(request)
    return JsonResponse({"error": "Method not allowed."}, status=405)


@require_GET
def reservation_detail_api(request, reservation_id: int):
    """
    GET /api/reservations/<id>/
    """
    denied = _auth_error(request)
    if denied is not None:
        return denied

    try:
        reservation = get_reservation(reservation_id)
    except Reservation.DoesNotExist:
        return JsonResponse({"error": "Reservation not found."}, status=404)
    except DatabaseError:
        return _store_error("loading a reservation")

    return JsonResponse({"reservation": _reservation_payload(reservation)})


@require_POST
def cancel_reservation_api(request, reservation_id: int):
    """
    POST /api/reservations/<id>/cancel/
    """
    denied = _auth_error(request)
    if denied is not None:
        return denied

    try:
        reservation = cancel_reservation(reservation_id=reservation_id)
    except Reservation.DoesNotExist:
        return JsonResponse({"error": "Reservation not found."}, status=404)
    except (AlreadyCancelledError, CannotCancelCompletedError) as exc:
        return JsonResponse({"error": str(exc)}, status=409)
    except DatabaseError:
        return _store_error("cancelling a reservation")

    return JsonResponse(
        {
            "success": True,
            "reservation_id": reservation.id,
            "room_number": reservation.room_number,
            "message": "Reservation cancelled.",
        }
    )


@require_POST
def reservation_status_api(request, reservation_id: int):
    """
    POST /api/reservations/<id>/status/
    Payload (JSON):
      - status: CHECKED_IN | CHECKED_OUT | CANCELLED
    """
    denied = _auth_error(request)
    if denied is not None:
        return denied

    payload = _load_json(request)
    if payload is None:
        return JsonResponse({"error": "Invalid JSON payload."}, status=400)

    new_status = str(payload.get("status") or "").strip().upper()
    if not new_status:
        return JsonResponse({"error": "status is required."}, status=400)

    try:
        reservation = update_reservation_status(reservation_id=reservation_id, new_status=new_status)
    except ValidationError as exc:
        return JsonResponse({"error": "Validation error.", "details": exc.message_dict}, status=400)
    except Reservation.DoesNotExist:
        return JsonResponse({"error": "Reservation not found."}, status=404)
    except (AlreadyCancelledError, CannotCancelCompletedError, InvalidStatusTransitionError) as exc:
        return JsonResponse({"error": str(exc)}, status=409)
    except DatabaseError:
        return _store_error("updating a reservation status")

    return JsonResponse({"success": True, "reservation": _reservation_payload(reservation)})
