from django.contrib import admin
from .models import PointLog


@admin.register(PointLog)
class PointLogAdmin(admin.ModelAdmin):
    list_display = ('student_name', 'points', 'method', 'admin_name', 'created_at')
    list_filter = ('method', 'created_at')
    search_fields = ('student_name', 'admin_name')

    # Audit trail: read-only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
