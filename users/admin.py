from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'first_name', 'last_name', 'nickname', 'role', 'points', 'camp_mentor', 'camp')
    list_filter = ('role', 'camp_mentor', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'nickname', 'student_id')
    fieldsets = UserAdmin.fieldsets + (
        ('Points', {'fields': ('role', 'nickname', 'student_id', 'points', 'camp_mentor', 'camp')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Points', {'fields': ('role', 'first_name', 'last_name', 'nickname')}),
    )
