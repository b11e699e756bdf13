"""
Core Models - Base classes for all apps

This module provides reusable base model classes used across the application:
- TenantAwareModel: Adds tenant field and tenant-aware functionality
- TimestampedModel: Adds created_at/updated_at timestamps
"""

from django.db import models


class TenantAwareModel(models.Model):
    """
    Abstract base class for tenant-aware models.

    Provides:
    - Foreign key to Tenant model
    - Automatic tenant context awareness

    Every row owned by an organization inherits from this; querysets are
    scoped by the `tenant` column.
    """

    tenant = models.ForeignKey(
        'tenants.Tenant',
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True,
        help_text='Tenant that owns this record'
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        """Ensure tenant is set on save"""
        # Tenant should be set by the calling code; fall back to the
        # tenant bound to the current request or task.
        if not self.tenant_id:
            from tenants.context import get_current_tenant

            current_tenant = get_current_tenant()
            if current_tenant:
                self.tenant = current_tenant

        super().save(*args, **kwargs)


class TimestampedModel(models.Model):
    """
    Abstract base class that adds timestamp fields.

    Provides:
    - created_at: Automatically set on creation
    - updated_at: Automatically updated on save
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text='Timestamp when record was created'
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='Timestamp when record was last updated'
    )

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
        ordering = ['-created_at']
