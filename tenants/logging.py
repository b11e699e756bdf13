"""
Tenants Logging - Tenant-aware logging filters and formatters.

This module provides logging components that include tenant context:
- TenantContextFilter: Adds tenant info to log records
- TenantFormatter: Custom formatter with tenant prefixes
- TenantAuditLogger: Audit trail for writes and lifecycle changes

Usage in settings.py:
    LOGGING = {
        'filters': {
            'tenant_context': {
                '()': 'tenants.logging.TenantContextFilter',
            },
        },
        'handlers': {
            'console': {
                'filters': ['tenant_context'],
                ...
            },
        },
    }
"""

import logging
from typing import Optional

from .context import get_current_tenant


class TenantContextFilter(logging.Filter):
    """
    Logging filter that adds tenant context to log records.

    Adds the following attributes to log records:
    - tenant: Tenant name or 'public'
    - tenant_id: Tenant ID or None
    - tenant_slug: Tenant slug or 'public'
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add tenant context to log record."""
        tenant = get_current_tenant()

        if tenant:
            record.tenant = tenant.name
            record.tenant_id = tenant.id
            record.tenant_slug = tenant.slug
        else:
            record.tenant = 'public'
            record.tenant_id = None
            record.tenant_slug = 'public'

        return True


class TenantFormatter(logging.Formatter):
    """
    Custom formatter that includes tenant context.

    Default format:
        [{asctime}] [{levelname}] [tenant:{tenant}] {name}: {message}
    """

    default_format = '[{asctime}] [{levelname}] [tenant:{tenant}] {name}: {message}'

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, style: str = '{'):
        if fmt is None:
            fmt = self.default_format
        super().__init__(fmt, datefmt, style)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with tenant context."""
        # Records that bypassed the filter still need the attribute
        if not hasattr(record, 'tenant'):
            tenant = get_current_tenant()
            record.tenant = tenant.name if tenant else 'public'

        return super().format(record)


class TenantAuditLogger:
    """
    Specialized logger for tenant audit events.

    Logs to the 'tenant.audit' logger with full tenant context.
    """

    def __init__(self, name: str = 'tenant.audit'):
        self.logger = logging.getLogger(name)

    def log_action(
        self,
        action: str,
        resource_type: str,
        resource_id: str = '',
        user=None,
        details: dict = None,
        level: int = logging.INFO
    ):
        """
        Log an audit event.

        Args:
            action: Action performed (create, update, delete, complete, etc.)
            resource_type: Type of resource affected
            resource_id: ID of affected resource
            user: User who performed action (optional)
            details: Additional details dict
            level: Log level (default INFO)
        """
        tenant = get_current_tenant()
        if user is not None and not getattr(user, 'is_authenticated', False):
            user = None

        extra = {
            'tenant': tenant.name if tenant else 'public',
            'tenant_id': tenant.id if tenant else None,
            'action': action,
            'resource_type': resource_type,
            'resource_id': resource_id,
            'user_id': user.id if user else None,
            'details': details or {},
        }

        message = f"[AUDIT] {action} on {resource_type}"
        if resource_id:
            message += f" ({resource_id})"
        if user:
            message += f" by {user.get_username()}"

        self.logger.log(level, message, extra=extra)

    def log_status_change(self, tenant, old_status: str, new_status: str, user=None):
        """Log a tenant lifecycle transition."""
        self.log_action(
            action='status_change',
            resource_type='tenant',
            resource_id=tenant.slug,
            user=user,
            details={'old_status': old_status, 'new_status': new_status}
        )


# Module-level audit logger instance
audit_logger = TenantAuditLogger()
