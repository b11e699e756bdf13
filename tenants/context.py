"""
Tenants Context - Request-scoped tenant context management.

This module provides async- and thread-safe tenant context propagation for:
- Model save hooks (core.models.TenantAwareModel)
- Logging filters and the audit logger
- Management commands and utility functions

Usage:
    from tenants.context import tenant_context, get_current_tenant

    # Context manager for temporary tenant switching
    with tenant_context(tenant):
        do_something()

    # Get current tenant anywhere in code
    tenant = get_current_tenant()
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tenants.models import Tenant

logger = logging.getLogger(__name__)


_current_tenant: ContextVar[Optional['Tenant']] = ContextVar(
    'current_tenant', default=None
)


def get_current_tenant() -> Optional['Tenant']:
    """
    Get the current tenant.

    Returns:
        Current Tenant instance or None if not in tenant context.
    """
    return _current_tenant.get()


def set_current_tenant(tenant: Optional['Tenant']) -> None:
    """
    Set the current tenant.

    Note:
        Prefer using tenant_context() context manager for temporary switches.
    """
    _current_tenant.set(tenant)


def clear_tenant_context() -> None:
    """
    Clear the tenant context.

    Call this after processing a request to prevent context leaks.
    """
    _current_tenant.set(None)


@contextmanager
def tenant_context(tenant: Optional['Tenant']):
    """
    Context manager for executing code in a tenant's context.

    Supports nested usage; the previous tenant is restored on exit.

    Example:
        with tenant_context(tenant):
            Project.objects.create(name='Launch')  # tenant filled in on save
    """
    token = _current_tenant.set(tenant)
    logger.debug(f"Entered tenant context: {tenant.slug if tenant else 'none'}")
    try:
        yield tenant
    finally:
        _current_tenant.reset(token)
        logger.debug("Exited tenant context")
