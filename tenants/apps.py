"""
Tenants app configuration.

Organizations, subscription plans and the tenant context shared by every
tenant-owned model.
"""

from django.apps import AppConfig


class TenantsConfig(AppConfig):
    """Configuration for the tenants app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tenants'
    verbose_name = 'Tenants'
