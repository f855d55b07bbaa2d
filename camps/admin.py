from django.contrib import admin
from .models import Camp, CampKid


@admin.register(Camp)
class CampAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_by', 'created_at')
    search_fields = ('name',)
    filter_horizontal = ('mentors',)


@admin.register(CampKid)
class CampKidAdmin(admin.ModelAdmin):
    list_display = ('nickname', 'first_name', 'last_name', 'camp', 'group_number', 'points')
    list_filter = ('camp', 'group_number')
    search_fields = ('nickname', 'first_name', 'last_name')
