"""
Accounts Admin - Admin configuration for tenant membership.
"""

from django.contrib import admin

from .models import TenantUser


@admin.register(TenantUser)
class TenantUserAdmin(admin.ModelAdmin):
    list_display = ['user', 'tenant', 'role', 'is_primary_tenant', 'is_active', 'joined_at']
    list_filter = ['role', 'is_active', 'tenant']
    search_fields = ['user__username', 'user__email', 'tenant__name']
    raw_id_fields = ['user', 'tenant']
    readonly_fields = ['uuid', 'joined_at', 'deactivated_at']
