from django.urls import path

from .api import (
    availability_api,
    cancel_reservation_api,
    reservation_detail_api,
    reservation_status_api,
    reservations_api,
    rooms_api,
)


app_name = "hotel"

urlpatterns = [
    path("api/rooms/", rooms_api, name="rooms_api"),
    path("api/availability/", availability_api, name="availability_api"),
    path("api/reservations/", reservations_api, name="reservations_api"),
    path("api/reservations/<int:reservation_id>/", reservation_detail_api, name="reservation_detail_api"),
    path(
        "api/reservations/<int:reservation_id>/cancel/",
        cancel_reservation_api,
        name="cancel_reservation_api",
    ),
    path(
        "api/reservations/<int:reservation_id>/status/",
        reservation_status_api,
        name="reservation_status_api",
    ),
]
