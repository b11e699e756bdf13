"""
Accounts Models - Tenant membership and roles.

A user can belong to several tenants with a different role in each. Roles
drive the DRF permission classes in accounts.permissions.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class TenantUser(models.Model):
    """
    Links a user to a tenant with role and permissions.
    A user can belong to multiple tenants with different roles.
    """

    class UserRole(models.TextChoices):
        OWNER = 'owner', _('Owner')
        ADMIN = 'admin', _('Administrator')
        MANAGER = 'manager', _('Project Manager')
        MEMBER = 'member', _('Member')
        VIEWER = 'viewer', _('Viewer (Read-only)')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tenant_memberships'
    )
    tenant = models.ForeignKey(
        'tenants.Tenant',
        on_delete=models.CASCADE,
        related_name='members'
    )

    # Role
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.MEMBER
    )
    job_title = models.CharField(max_length=100, blank=True)

    # Status
    is_active = models.BooleanField(default=True)
    is_primary_tenant = models.BooleanField(
        default=False,
        help_text=_('Is this the user\'s primary tenant?')
    )

    # Timestamps
    joined_at = models.DateTimeField(auto_now_add=True)
    deactivated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Tenant User')
        verbose_name_plural = _('Tenant Users')
        unique_together = ['user', 'tenant']
        ordering = ['-joined_at']

    def __str__(self):
        return f"{self.user.get_username()} @ {self.tenant.name} ({self.get_role_display()})"

    @property
    def can_manage_projects(self):
        return self.role in MANAGER_ROLES

    @property
    def can_write(self):
        return self.role != self.UserRole.VIEWER

    def deactivate(self):
        self.is_active = False
        self.deactivated_at = timezone.now()
        self.save(update_fields=['is_active', 'deactivated_at'])


# Roles allowed to create, edit and delete projects and to assign tasks
MANAGER_ROLES = frozenset({
    TenantUser.UserRole.OWNER,
    TenantUser.UserRole.ADMIN,
    TenantUser.UserRole.MANAGER,
})
