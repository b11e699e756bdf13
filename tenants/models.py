"""
Tenants Models - Organizations and subscription plans.

Tenancy is shared-schema: every tenant-owned row carries a `tenant` foreign
key (see core.models.TenantAwareModel) and querysets are filtered on it.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Plan(models.Model):
    """
    Subscription plans with limits.
    Defines how much each tenant tier may create.
    """

    class PlanType(models.TextChoices):
        FREE = 'free', _('Free')
        STARTER = 'starter', _('Starter')
        PROFESSIONAL = 'professional', _('Professional')
        ENTERPRISE = 'enterprise', _('Enterprise')

    # Basic Info
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    plan_type = models.CharField(
        max_length=20,
        choices=PlanType.choices,
        default=PlanType.FREE
    )
    description = models.TextField(blank=True)

    # Pricing
    price_monthly = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0.00')
    )
    currency = models.CharField(max_length=3, default='USD')

    # Limits (null = unlimited)
    max_users = models.PositiveIntegerField(null=True, blank=True, help_text=_('Maximum users allowed'))
    max_projects = models.PositiveIntegerField(null=True, blank=True, help_text=_('Maximum projects allowed'))

    # Metadata
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'price_monthly']
        verbose_name = _('Subscription Plan')
        verbose_name_plural = _('Subscription Plans')

    def __str__(self):
        return f"{self.name} ({self.get_plan_type_display()})"


class Tenant(models.Model):
    """
    Multi-tenant organization.
    Each tenant represents a company using the platform.
    """

    class TenantStatus(models.TextChoices):
        ACTIVE = 'active', _('Active')
        SUSPENDED = 'suspended', _('Suspended')
        CANCELLED = 'cancelled', _('Cancelled')
        TRIAL = 'trial', _('Trial')

    # Identity
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    name = models.CharField(max_length=255, help_text=_('Organization name'))
    slug = models.SlugField(max_length=100, unique=True)

    # Status & Plan
    status = models.CharField(
        max_length=20,
        choices=TenantStatus.choices,
        default=TenantStatus.TRIAL
    )
    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        related_name='tenants',
        null=True,
        blank=True
    )

    # Trial & Subscription
    trial_ends_at = models.DateTimeField(null=True, blank=True)
    paid_until = models.DateTimeField(null=True, blank=True)
    on_trial = models.BooleanField(default=True)

    # Owner (first admin user)
    owner_email = models.EmailField(help_text=_('Primary contact email'))

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    activated_at = models.DateTimeField(null=True, blank=True)
    suspended_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Tenant')
        verbose_name_plural = _('Tenants')
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_on_trial(self):
        if not self.on_trial:
            return False
        if self.trial_ends_at and timezone.now() > self.trial_ends_at:
            return False
        return True

    @property
    def accepts_requests(self):
        """Trial and active tenants may use the API."""
        return self.status in (self.TenantStatus.ACTIVE, self.TenantStatus.TRIAL)

    @property
    def inactive_reason(self):
        """Why requests are refused, or None while the tenant accepts them."""
        if self.status == self.TenantStatus.SUSPENDED:
            return "Account has been suspended."
        if self.status == self.TenantStatus.CANCELLED:
            return "Account has been cancelled."
        return None

    @property
    def trial_days_remaining(self):
        if not self.trial_ends_at:
            return 0
        delta = self.trial_ends_at - timezone.now()
        return max(0, delta.days)

    def activate(self):
        """Activate tenant after successful payment or approval."""
        self.status = self.TenantStatus.ACTIVE
        self.on_trial = False
        self.activated_at = timezone.now()
        self.save(update_fields=['status', 'on_trial', 'activated_at', 'updated_at'])

    def suspend(self):
        """Suspend tenant (e.g., payment failure)."""
        self.status = self.TenantStatus.SUSPENDED
        self.suspended_at = timezone.now()
        self.save(update_fields=['status', 'suspended_at', 'updated_at'])

    def cancel(self):
        """Cancel tenant subscription."""
        self.status = self.TenantStatus.CANCELLED
        self.save(update_fields=['status', 'updated_at'])

    def reactivate(self, plan=None):
        """
        Reactivate a suspended or cancelled tenant.

        Args:
            plan: Optional new plan to assign.
        """
        if plan:
            self.plan = plan
        self.status = self.TenantStatus.ACTIVE
        self.suspended_at = None
        self.save(update_fields=['status', 'plan', 'suspended_at', 'updated_at'])

    def extend_trial(self, days: int = 14):
        """Push the trial end forward by `days` from now or from the current end."""
        base = self.trial_ends_at if self.trial_ends_at and self.trial_ends_at > timezone.now() else timezone.now()
        self.trial_ends_at = base + timedelta(days=days)
        self.on_trial = True
        self.status = self.TenantStatus.TRIAL
        self.save(update_fields=['trial_ends_at', 'on_trial', 'status', 'updated_at'])
