from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser, Business


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    ordering = ['-date_joined']
    list_display = ['email', 'name', 'is_super_admin', 'is_active', 'date_joined']
    search_fields = ['email', 'name']
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('name', 'phone')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'is_super_admin')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'name', 'password1', 'password2')}),
    )


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'owner', 'is_active', 'created_at']
    search_fields = ['name', 'slug', 'owner__email']
    list_filter = ['is_active']
