"""
Tenants Utilities - Tenant lookup helpers.

Lookups cache only the tenant primary key, so status changes are always
read fresh from the database.
"""

import logging
import uuid
from typing import Optional

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

TENANT_CACHE_PREFIX = 'tenant:'
TENANT_CACHE_TIMEOUT = getattr(settings, 'TENANT_CACHE_TIMEOUT', 300)


def _cached_lookup(cache_key: str, **lookup):
    from tenants.models import Tenant

    tenant_id = cache.get(cache_key)
    if tenant_id:
        try:
            return Tenant.objects.select_related('plan').get(id=tenant_id)
        except Tenant.DoesNotExist:
            cache.delete(cache_key)

    try:
        tenant = Tenant.objects.select_related('plan').get(**lookup)
    except Tenant.DoesNotExist:
        return None
    cache.set(cache_key, tenant.id, TENANT_CACHE_TIMEOUT)
    return tenant


def get_tenant_by_slug(slug: str):
    """
    Get tenant by slug.

    Returns:
        Tenant instance or None
    """
    return _cached_lookup(f"{TENANT_CACHE_PREFIX}slug:{slug}", slug=slug)


def get_tenant_by_uuid(uuid_str: str):
    """
    Get tenant by UUID. Malformed UUIDs return None.
    """
    try:
        value = uuid.UUID(str(uuid_str))
    except (TypeError, ValueError):
        return None
    return _cached_lookup(f"{TENANT_CACHE_PREFIX}uuid:{value}", uuid=value)


def get_tenant_by_identifier(identifier: str):
    """Resolve a header value that is either a tenant UUID or a slug."""
    if not identifier:
        return None
    return get_tenant_by_uuid(identifier) or get_tenant_by_slug(identifier)


def get_primary_tenant_for_user(user) -> Optional['Tenant']:
    """
    Return the user's primary tenant, or the first active membership.

    Anonymous users have no tenant.
    """
    if user is None or not user.is_authenticated:
        return None

    from accounts.models import TenantUser

    membership = (
        TenantUser.objects
        .filter(user=user, is_active=True)
        .select_related('tenant', 'tenant__plan')
        .order_by('-is_primary_tenant', 'joined_at')
        .first()
    )
    return membership.tenant if membership else None


def invalidate_tenant_cache(tenant):
    """Drop cached lookups for a tenant."""
    cache.delete_many([
        f"{TENANT_CACHE_PREFIX}slug:{tenant.slug}",
        f"{TENANT_CACHE_PREFIX}uuid:{tenant.uuid}",
    ])
    logger.debug(f"Invalidated tenant cache for {tenant.slug}")
