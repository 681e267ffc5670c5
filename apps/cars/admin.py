# ==========================================
# apps/cars/admin.py
# ==========================================

from django.contrib import admin
from apps.cars.models import Car


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    """Admin interface for Cars."""

    list_display = [
        'name',
        'group',
        'address',
        'currently_in_use',
        'currently_used_by_full_name',
        'updated_at',
    ]
    list_filter = ['currently_in_use', 'updated_at']
    search_fields = ['name', 'group__name', 'address']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['group__name', 'name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'icon', 'group', 'note')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'address')
        }),
        ('Usage', {
            'fields': ('currently_in_use', 'currently_used_by', 'currently_used_by_full_name')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['release_claims']

    @admin.action(description='Mark selected cars as not in use')
    def release_claims(self, request, queryset):
        count = queryset.update(
            currently_in_use=False,
            currently_used_by=None,
            currently_used_by_full_name='',
        )
        self.message_user(request, f'Released {count} car(s).')

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('group', 'currently_used_by')
