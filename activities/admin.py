from django.contrib import admin
from .models import Activity, Completion


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ('name', 'points', 'date', 'time', 'created_by', 'created_at')
    search_fields = ('name', 'description')
    list_filter = ('date', 'created_at')


@admin.register(Completion)
class CompletionAdmin(admin.ModelAdmin):
    list_display = ('user', 'activity_name', 'points_earned', 'completed_at')
    search_fields = ('user__username', 'activity_name')
    list_filter = ('completed_at',)
