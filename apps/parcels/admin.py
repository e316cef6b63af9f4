from django.contrib import admin

from .models import Parcel


@admin.register(Parcel)
class ParcelAdmin(admin.ModelAdmin):
    """Read-mostly view of the catalog; prices are managed in code."""

    list_display = ['id', 'type', 'get_price_display', 'row', 'col', 'goal_side', 'goal_position']
    list_filter = ['type', 'goal_side']
    search_fields = ['id']
    readonly_fields = ['id', 'type', 'row', 'col', 'goal_side', 'goal_position', 'created_at', 'updated_at']
    ordering = ['type', 'row', 'col', 'id']
    list_per_page = 100

    def get_price_display(self, obj):
        return f"{obj.price} EUR"
    get_price_display.short_description = 'Price'
    get_price_display.admin_order_field = 'price_cents'

    def has_add_permission(self, request):
        """Parcels come from the catalog, not from manual entry."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False
