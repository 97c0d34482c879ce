from django.contrib import admin, messages
from django.utils.html import format_html

from .models import Customer, Reservation, ReservationStatus, Room, RoomStatus
from .services import ReservationError, cancel_reservation, update_reservation_status


admin.site.site_header = "Hotel Reservation Admin"
admin.site.site_title = "Hotel Reservation Admin"
admin.site.index_title = "Hotel Reservation Controls"


STATUS_COLORS = {
    RoomStatus.AVAILABLE: "#2e7d32",
    RoomStatus.OCCUPIED: "#c62828",
    RoomStatus.MAINTENANCE: "#8d6e63",
    ReservationStatus.CONFIRMED: "#1565c0",
    ReservationStatus.CHECKED_IN: "#2e7d32",
    ReservationStatus.CHECKED_OUT: "#7e8571",
    ReservationStatus.CANCELLED: "#9e9e9e",
}


def _badge(value: str, label: str) -> str:
    return format_html(
        '<span style="padding:3px 8px;border-radius:999px;'
        "border: 1px solid currentColor;"
        "color: {};"
        'font-weight: 600; font-size: 11px; letter-spacing: 0.3px;">{}</span>',
        STATUS_COLORS.get(value, "#333"),
        label,
    )


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "phone_number", "id_proof", "created_at")
    search_fields = ("first_name", "last_name", "email", "phone_number")
    ordering = ("-created_at",)
    readonly_fields = ("created_at",)

    @admin.display(description="Name", ordering="last_name")
    def full_name(self, obj: Customer) -> str:
        return obj.full_name


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "room_type", "price_per_night", "status_badge", "floor_number", "max_occupancy")
    list_filter = ("room_type", "status", "floor_number")
    search_fields = ("room_number",)
    ordering = ("room_number",)
    actions = ("mark_available",)

    @admin.display(description="Status", ordering="status")
    def status_badge(self, obj: Room) -> str:
        return _badge(obj.status, obj.get_status_display())

    @admin.action(description="Mark selected rooms as available")
    def mark_available(self, request, queryset):
        updated = queryset.exclude(status=RoomStatus.AVAILABLE).update(status=RoomStatus.AVAILABLE)
        self.message_user(request, f"{updated} room(s) marked as available.", messages.SUCCESS)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer_name",
        "room_number",
        "check_in_date",
        "check_out_date",
        "nights",
        "total_amount",
        "status_badge",
        "created_at",
    )
    list_filter = ("status", "room__room_type", "check_in_date")
    search_fields = ("customer__email", "customer__last_name", "customer__phone_number", "room__room_number")
    ordering = ("-created_at",)
    # Booking fields change only through the lifecycle actions below.
    readonly_fields = (
        "room",
        "check_in_date",
        "check_out_date",
        "total_amount",
        "status",
        "created_at",
        "updated_at",
    )
    autocomplete_fields = ("customer",)
    list_select_related = ("customer", "room")
    actions = ("check_in_selected", "check_out_selected", "cancel_selected")

    @admin.display(description="Customer", ordering="customer__last_name")
    def customer_name(self, obj: Reservation) -> str:
        return obj.customer_name

    @admin.display(description="Room", ordering="room__room_number")
    def room_number(self, obj: Reservation) -> str:
        return obj.room_number

    @admin.display(description="Status", ordering="status")
    def status_badge(self, obj: Reservation) -> str:
        return _badge(obj.status, obj.get_status_display())

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if obj and obj.status in (ReservationStatus.CANCELLED, ReservationStatus.CHECKED_OUT):
            readonly.append("customer")
        return readonly

    def has_add_permission(self, request):
        # Bookings are priced and validated by the lifecycle service.
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop("delete_selected", None)
        return actions

    def _apply_to_each(self, request, queryset, change, done_label: str) -> None:
        done = 0
        for reservation_id in queryset.values_list("id", flat=True):
            try:
                change(reservation_id)
            except ReservationError as exc:
                self.message_user(request, f"Reservation #{reservation_id}: {exc}", messages.WARNING)
            else:
                done += 1
        if done:
            self.message_user(request, f"{done} reservation(s) {done_label}.", messages.SUCCESS)

    @admin.action(description="Check in selected reservations")
    def check_in_selected(self, request, queryset):
        self._apply_to_each(
            request,
            queryset,
            lambda pk: update_reservation_status(reservation_id=pk, new_status=ReservationStatus.CHECKED_IN),
            "checked in",
        )

    @admin.action(description="Check out selected reservations")
    def check_out_selected(self, request, queryset):
        self._apply_to_each(
            request,
            queryset,
            lambda pk: update_reservation_status(reservation_id=pk, new_status=ReservationStatus.CHECKED_OUT),
            "checked out",
        )

    @admin.action(description="Cancel selected reservations")
    def cancel_selected(self, request, queryset):
        self._apply_to_each(
            request,
            queryset,
            lambda pk: cancel_reservation(reservation_id=pk),
            "cancelled",
        )
