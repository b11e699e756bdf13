"""
Tenants Middleware - Tenant resolution for every request.

Resolution order:
1. X-Tenant-ID header (tenant UUID or slug), for API clients
2. The authenticated user's primary membership (session-authenticated users)

Token-authenticated API users are only known once DRF authenticates the
request, so SecureTenantViewSet repeats the membership fallback there.
"""

import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

from .context import set_current_tenant, clear_tenant_context
from .services import TenantService
from .utils import get_primary_tenant_for_user, get_tenant_by_identifier

logger = logging.getLogger(__name__)


TENANT_HEADER_NAME = getattr(settings, 'TENANT_HEADER_NAME', 'X-Tenant-ID')


def tenant_header_value(request):
    """Read the tenant header from a Django or DRF request."""
    meta_key = f'HTTP_{TENANT_HEADER_NAME.replace("-", "_").upper()}'
    return request.META.get(meta_key, '').strip()


class TenantResolutionMiddleware:
    """
    Attach `request.tenant` and the tenant context for the request lifetime.

    - Unknown header tenants get a 400 JSON response
    - Suspended or cancelled tenants get a 403 JSON response
    - Expired trials are suspended on first sight
    - The tenant context is always cleared after the response
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.exempt_urls = tuple(getattr(settings, 'TENANT_EXEMPT_URLS', ()))

    def __call__(self, request):
        try:
            response = self.process_request(request)
            if response is not None:
                return response
            return self.get_response(request)
        finally:
            # Prevent context leaks between requests
            clear_tenant_context()

    def process_request(self, request):
        request.tenant = None
        exempt = self._is_exempt_url(request.path)

        identifier = tenant_header_value(request)
        if identifier:
            tenant = get_tenant_by_identifier(identifier)
            if tenant is None:
                logger.warning(f"Tenant not found for header value: {identifier}")
                if not exempt:
                    return self._error_response(
                        "Tenant not found. Please check your tenant identifier.",
                        'TENANT_NOT_FOUND',
                        status=400,
                    )
                return None
        else:
            tenant = get_primary_tenant_for_user(getattr(request, 'user', None))

        if tenant is None:
            return None

        TenantService.expire_trial(tenant)

        if not exempt and not tenant.accepts_requests:
            return self._inactive_response(tenant.inactive_reason)

        request.tenant = tenant
        set_current_tenant(tenant)
        return None

    def _is_exempt_url(self, path):
        """Check if URL is exempt from tenant status checks."""
        return any(path.startswith(url) for url in self.exempt_urls)

    def _inactive_response(self, reason):
        return self._error_response(
            "This organization account is not active.",
            'TENANT_INACTIVE',
            status=403,
            meta={'reason': reason},
        )

    def _error_response(self, message, error_code, status, meta=None):
        return JsonResponse(
            {
                'success': False,
                'data': None,
                'message': message,
                'error_code': error_code,
                'errors': [],
                'meta': {
                    'timestamp': timezone.now().isoformat(),
                    **(meta or {}),
                },
            },
            status=status,
        )
