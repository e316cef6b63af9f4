from django.contrib import admin, messages
from django.utils.html import format_html

from .models import Reservation, ReservationItem, ReservationStatus
from .services import (
    cancel_reservation,
    confirm_reservation,
    send_payment_confirmation_email,
)
from .services.exceptions import ReservationServiceError


class ReservationItemInline(admin.TabularInline):
    """Inline admin for the parcels on a reservation."""
    model = ReservationItem
    extra = 0
    fields = ['parcel', 'active', 'created_at']
    readonly_fields = ['parcel', 'active', 'created_at']

    def has_add_permission(self, request, obj=None):
        """Items are created by the reservation service only."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    """
    Admin interface for reservations.

    Status changes go through the reservation services so that parcels are
    released and buyers are notified exactly as via the API.
    """

    list_display = [
        'id',
        'buyer_name',
        'buyer_email',
        'total_amount_display',
        'status_badge',
        'receipt_requested',
        'created_at',
        'expires_at',
        'paid_at',
    ]

    list_filter = [
        'status',
        'receipt_requested',
        'anonymous',
        'created_at',
    ]

    search_fields = [
        'id',
        'buyer_name',
        'buyer_email',
        'donor_name',
    ]

    readonly_fields = [
        'id',
        'total_cents',
        'status',
        'created_at',
        'expires_at',
        'paid_at',
        'cancelled_at',
        'updated_at',
    ]

    fieldsets = (
        ('Reservierung', {
            'fields': ('id', 'status', 'total_cents')
        }),
        ('Käufer', {
            'fields': ('buyer_name', 'buyer_email', 'donor_name', 'anonymous')
        }),
        ('Spendenquittung', {
            'fields': ('receipt_requested', 'buyer_address', 'buyer_zip', 'buyer_city')
        }),
        ('Zeitstempel', {
            'fields': ('created_at', 'expires_at', 'paid_at', 'cancelled_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [ReservationItemInline]
    actions = ['confirm_selected', 'cancel_selected']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        """Reservations are created through the public API."""
        return False

    def total_amount_display(self, obj):
        return f"{obj.total_amount:.2f} €"
    total_amount_display.short_description = 'Betrag'
    total_amount_display.admin_order_field = 'total_cents'

    def status_badge(self, obj):
        """Display reservation status as colored badge."""
        colors = {
            ReservationStatus.PENDING: ('#F7E816', '#262667'),
            ReservationStatus.PAID: ('#6B8E5E', 'white'),
            ReservationStatus.EXPIRED: ('#A0A0B0', 'white'),
            ReservationStatus.CANCELLED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def _apply(self, request, queryset, action, success_label):
        """Run a status transition per selected reservation, reporting failures."""
        done = []
        for reservation_id in queryset.values_list('id', flat=True):
            try:
                done.append(action(reservation_id))
            except ReservationServiceError as e:
                self.message_user(request, f"{reservation_id}: {e}", messages.WARNING)

        if done:
            self.message_user(request, f"{len(done)} Reservierung(en) {success_label}.", messages.SUCCESS)
        return done

    @admin.action(description='Zahlung bestätigen')
    def confirm_selected(self, request, queryset):
        for reservation in self._apply(request, queryset, confirm_reservation, 'bestätigt'):
            send_payment_confirmation_email(reservation)

    @admin.action(description='Reservierung stornieren')
    def cancel_selected(self, request, queryset):
        self._apply(request, queryset, cancel_reservation, 'storniert')
