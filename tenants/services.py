"""
Tenants Services - Business logic for tenant management.

This module provides tenant lifecycle management:
- Tenant creation with an optional owner membership
- Tenant suspension, reactivation and cancellation
- Plan limit checks
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from .logging import audit_logger
from .models import Tenant, Plan
from .utils import invalidate_tenant_cache

logger = logging.getLogger(__name__)


class TenantService:
    """
    Service class for tenant operations.
    Handles tenant creation, lifecycle changes and plan limits.
    """

    @classmethod
    @transaction.atomic
    def create_tenant(
        cls,
        name: str,
        owner_email: str,
        plan: Optional[Plan] = None,
        owner=None,
        skip_trial: bool = False,
        **kwargs
    ) -> Tenant:
        """
        Create a new tenant.

        Args:
            name: Organization name
            owner_email: Primary contact email
            plan: Subscription plan (defaults to the active free plan)
            owner: User to register as OWNER member (optional)
            skip_trial: Create the tenant already active
            **kwargs: Additional tenant fields

        Returns:
            Created Tenant instance
        """
        if not plan:
            plan = Plan.objects.filter(
                plan_type=Plan.PlanType.FREE,
                is_active=True
            ).first()

        base_slug = slugify(name)[:50] or 'tenant'
        slug = base_slug
        counter = 1
        while Tenant.objects.filter(slug=slug).exists():
            slug = f"{base_slug}-{counter}"
            counter += 1

        trial_days = getattr(settings, 'TENANT_TRIAL_DAYS', 14)
        if skip_trial:
            status, on_trial, trial_ends_at = Tenant.TenantStatus.ACTIVE, False, None
        else:
            status = Tenant.TenantStatus.TRIAL
            on_trial = True
            trial_ends_at = timezone.now() + timedelta(days=trial_days)

        tenant = Tenant.objects.create(
            name=name,
            slug=slug,
            owner_email=owner_email,
            plan=plan,
            status=status,
            on_trial=on_trial,
            trial_ends_at=trial_ends_at,
            activated_at=timezone.now() if skip_trial else None,
            **kwargs
        )

        if owner is not None:
            from accounts.models import TenantUser
            TenantUser.objects.create(
                user=owner,
                tenant=tenant,
                role=TenantUser.UserRole.OWNER,
                is_primary_tenant=not TenantUser.objects.filter(
                    user=owner, is_primary_tenant=True
                ).exists(),
            )

        audit_logger.log_action(
            action='create',
            resource_type='tenant',
            resource_id=tenant.slug,
            user=owner,
            details={'plan': plan.slug if plan else None, 'status': tenant.status},
        )
        logger.info(f"Tenant {tenant.slug} created ({tenant.status})")
        return tenant

    @classmethod
    def suspend_tenant(cls, tenant: Tenant, reason: str = '', suspended_by=None) -> Tuple[bool, str]:
        """
        Suspend a tenant.

        Returns:
            Tuple of (success: bool, message: str)
        """
        if tenant.status == Tenant.TenantStatus.SUSPENDED:
            return False, "Tenant is already suspended"

        previous_status = tenant.status
        tenant.suspend()
        cls._after_status_change(tenant, previous_status, suspended_by)

        logger.info(f"Tenant {tenant.slug} suspended: {reason}")
        return True, "Tenant suspended successfully"

    @classmethod
    def reactivate_tenant(cls, tenant: Tenant, plan: Optional[Plan] = None, activated_by=None) -> Tuple[bool, str]:
        """
        Reactivate a suspended or cancelled tenant, optionally on a new plan.

        Returns:
            Tuple of (success: bool, message: str)
        """
        if tenant.status == Tenant.TenantStatus.ACTIVE:
            return False, "Tenant is already active"

        previous_status = tenant.status
        tenant.reactivate(plan=plan)
        cls._after_status_change(tenant, previous_status, activated_by)

        logger.info(f"Tenant {tenant.slug} reactivated (previous status: {previous_status})")
        return True, "Tenant activated successfully"

    @classmethod
    def cancel_tenant(cls, tenant: Tenant, reason: str = '', cancelled_by=None) -> Tuple[bool, str]:
        """
        Cancel a tenant subscription. Data is kept.

        Returns:
            Tuple of (success: bool, message: str)
        """
        if tenant.status == Tenant.TenantStatus.CANCELLED:
            return False, "Tenant is already cancelled"

        previous_status = tenant.status
        tenant.cancel()
        cls._after_status_change(tenant, previous_status, cancelled_by)

        logger.info(f"Tenant {tenant.slug} cancelled: {reason}")
        return True, "Tenant cancelled successfully"

    @classmethod
    def expire_trial(cls, tenant: Tenant) -> bool:
        """
        Suspend a trial tenant whose trial period has ended.

        Called on every tenant resolution, header or membership based.

        Returns:
            True if the tenant was suspended
        """
        if tenant.status != Tenant.TenantStatus.TRIAL or not tenant.on_trial or tenant.is_on_trial:
            return False

        previous_status = tenant.status
        tenant.suspend()
        cls._after_status_change(tenant, previous_status, None)

        logger.info(f"Trial expired for tenant {tenant.slug}; suspending")
        return True

    @classmethod
    def _after_status_change(cls, tenant, previous_status, user):
        invalidate_tenant_cache(tenant)
        audit_logger.log_status_change(tenant, previous_status, tenant.status, user=user)

    @classmethod
    def get_usage(cls, tenant: Tenant) -> dict:
        """Current resource counts for a tenant."""
        from accounts.models import TenantUser
        from projects.models import Project

        return {
            'users': TenantUser.objects.filter(tenant=tenant, is_active=True).count(),
            'projects': Project.objects.filter(tenant=tenant).count(),
        }

    @classmethod
    def check_limit(cls, tenant: Tenant, resource: str, increment: int = 1) -> bool:
        """
        Check if tenant can add more of a resource.

        Args:
            tenant: Tenant to check
            resource: Resource type ('users', 'projects')
            increment: Amount to add

        Returns:
            True if within limits. Tenants without a plan, unknown resources
            and unlimited (null) plan limits always pass.
        """
        plan = tenant.plan
        if not plan:
            return True

        limit = getattr(plan, f'max_{resource}', None)
        if limit is None:
            return True

        current = cls.get_usage(tenant).get(resource, 0)
        return (current + increment) <= limit
