"""
Tenants Admin - Admin configuration for multi-tenant management.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Plan, Tenant


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = [
        'name', 'plan_type', 'price_monthly',
        'max_users', 'max_projects', 'is_active'
    ]
    list_filter = ['plan_type', 'is_active']
    search_fields = ['name', 'description']
    prepopulated_fields = {'slug': ('name',)}
    ordering = ['sort_order', 'price_monthly']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'plan_type', 'description')
        }),
        ('Pricing', {
            'fields': ('price_monthly', 'currency')
        }),
        ('Limits', {
            'fields': ('max_users', 'max_projects')
        }),
        ('Display Options', {
            'fields': ('is_active', 'sort_order')
        }),
    )


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = [
        'name', 'slug', 'status_badge', 'plan', 'owner_email',
        'trial_status', 'created_at'
    ]
    list_filter = ['status', 'plan', 'on_trial', 'created_at']
    search_fields = ['name', 'slug', 'owner_email']
    readonly_fields = ['uuid', 'created_at', 'updated_at', 'activated_at', 'suspended_at']
    prepopulated_fields = {'slug': ('name',)}
    ordering = ['-created_at']

    fieldsets = (
        ('Identity', {
            'fields': ('uuid', 'name', 'slug', 'owner_email')
        }),
        ('Status & Plan', {
            'fields': ('status', 'plan', 'on_trial', 'trial_ends_at', 'paid_until')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'activated_at', 'suspended_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        colors = {
            'active': 'green',
            'trial': 'blue',
            'suspended': 'red',
            'cancelled': 'gray',
        }
        color = colors.get(obj.status, 'gray')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px;">{}</span>',
            color, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def trial_status(self, obj):
        if not obj.on_trial:
            return format_html('<span style="color: gray;">{}</span>', 'N/A')
        days = obj.trial_days_remaining
        if days > 7:
            color = 'green'
        elif days > 3:
            color = 'orange'
        else:
            color = 'red'
        return format_html(
            '<span style="color: {};">{} days left</span>',
            color, days
        )
    trial_status.short_description = 'Trial'
