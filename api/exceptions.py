"""
API Exceptions - Custom Exception Classes for ProjectHub API

This module provides custom exception classes for standardized error handling:
- Tenant-specific exceptions
- Business rule and resource exceptions
- Plan limit exceptions
- The global DRF exception handler

All exceptions follow a consistent format:
{
    "success": false,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [...],
    "meta": {...}
}
"""

import logging
from typing import Any, Dict

from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class ProjectHubAPIException(APIException):
    """
    Base exception for all ProjectHub API errors.

    Attributes:
        status_code: HTTP status code
        default_detail: Default error message
        default_code: Machine-readable error code
        error_code: Specific error code for this instance
        extra_data: Additional data to include in response
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(
        self,
        detail: str = None,
        code: str = None,
        extra_data: Dict = None,
        **kwargs
    ):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}

        if detail is None:
            detail = str(self.default_detail)

        super().__init__(detail=detail, code=code)

    def get_full_details(self) -> Dict:
        """Get full error details for response."""
        return {
            'message': str(self.detail),
            'error_code': self.error_code,
            'extra_data': self.extra_data,
        }


# =============================================================================
# TENANT EXCEPTIONS
# =============================================================================

class TenantNotFoundError(ProjectHubAPIException):
    """Raised when the request names a tenant that does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Tenant not found. Please check your tenant identifier.")
    default_code = "TENANT_NOT_FOUND"


class TenantInactiveError(ProjectHubAPIException):
    """Raised when tenant is not active."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("This organization account is not active.")
    default_code = "TENANT_INACTIVE"

    def __init__(self, reason: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if reason:
            extra_data['reason'] = reason
        super().__init__(extra_data=extra_data, **kwargs)


class PlanLimitExceededError(ProjectHubAPIException):
    """Raised when a tenant is at the limit of its subscription plan."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You have reached the limit for your current plan.")
    default_code = "PLAN_LIMIT_EXCEEDED"

    def __init__(
        self,
        limit_name: str = None,
        current_usage: int = None,
        max_allowed: int = None,
        **kwargs
    ):
        detail = str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if limit_name:
            extra_data['limit_name'] = limit_name
            detail = f"You have reached the maximum number of {limit_name} for your plan."
        if current_usage is not None:
            extra_data['current_usage'] = current_usage
        if max_allowed is not None:
            extra_data['max_allowed'] = max_allowed

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(ProjectHubAPIException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
        if resource_id:
            extra_data['resource_id'] = str(resource_id)
            if detail == str(self.default_detail):
                detail = f"{resource_type or 'Resource'} with ID {resource_id} not found"

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class BusinessRuleError(ProjectHubAPIException):
    """
    Raised by service hooks when a write violates a business rule.

    The status code is chosen per raise (400 for validation, 404 when a
    referenced row is missing), mirroring `ServiceRequest.error()`.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("The request violates a business rule.")
    default_code = "BUSINESS_RULE_VIOLATION"

    CODES = {
        status.HTTP_400_BAD_REQUEST: "BUSINESS_RULE_VIOLATION",
        status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    }

    def __init__(self, detail: str = None, status_code: int = None, **kwargs):
        if status_code is not None:
            self.status_code = status_code
        kwargs.setdefault('code', self.CODES.get(self.status_code, self.default_code))
        super().__init__(detail=detail, **kwargs)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def projecthub_exception_handler(exc, context):
    """
    Custom exception handler for standardized error responses.

    All errors are formatted as:
    {
        "success": false,
        "data": null,
        "message": "Error description",
        "error_code": "MACHINE_CODE",
        "errors": [...],
        "meta": {
            "timestamp": "ISO8601",
            "tenant": "tenant_slug"
        }
    }
    """
    response = exception_handler(exc, context)

    if response is None:
        logger.exception(f"Unhandled exception: {exc}")
        return Response(
            {
                "success": False,
                "data": None,
                "message": "An unexpected error occurred.",
                "error_code": "INTERNAL_ERROR",
                "errors": [],
                "meta": {
                    "timestamp": timezone.now().isoformat(),
                }
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    error_data = {
        "success": False,
        "data": None,
        "message": "",
        "error_code": "ERROR",
        "errors": [],
        "meta": {
            "timestamp": timezone.now().isoformat(),
        }
    }

    if isinstance(exc, ProjectHubAPIException):
        error_data["message"] = str(exc.detail)
        error_data["error_code"] = exc.error_code
        if exc.extra_data:
            error_data["meta"].update(exc.extra_data)

    elif isinstance(exc, ValidationError):
        error_data["error_code"] = "VALIDATION_ERROR"
        if isinstance(exc.detail, dict):
            error_data["errors"] = [
                {"field": field, "messages": msgs if isinstance(msgs, list) else [str(msgs)]}
                for field, msgs in exc.detail.items()
            ]
            error_data["message"] = "Validation failed."
        elif isinstance(exc.detail, list):
            error_data["errors"] = [{"field": "non_field_errors", "messages": [str(e) for e in exc.detail]}]
            error_data["message"] = str(exc.detail[0]) if exc.detail else "Validation failed."
        else:
            error_data["message"] = str(exc.detail)

    else:
        error_data["message"] = str(exc.detail) if hasattr(exc, 'detail') else str(exc)
        error_data["error_code"] = getattr(exc, 'default_code', 'ERROR')

    request = context.get('request')
    if request:
        tenant = getattr(request, 'tenant', None)
        if tenant:
            error_data["meta"]["tenant"] = tenant.slug

    response.data = error_data
    return response


# =============================================================================
# EXCEPTION UTILITIES
# =============================================================================

def raise_for_tenant(tenant) -> None:
    """
    Raise appropriate exception based on tenant status.

    Usage:
        raise_for_tenant(request.tenant)
    """
    if not tenant:
        raise TenantNotFoundError()

    if not tenant.accepts_requests:
        raise TenantInactiveError(reason=tenant.inactive_reason)
