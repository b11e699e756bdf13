"""
API Base Classes - Tenant-Aware Foundation for ProjectHub API

This module provides the foundational classes for building tenant-aware REST APIs:
- Standard response format helpers
- Pagination with the standard envelope (see api.pagination)
- TenantAwareViewSet: Base ViewSet with tenant scoping

All API views should inherit from these base classes to ensure:
1. Proper tenant isolation
2. Consistent response formats
3. Audit logging integration
"""

import logging
from typing import Any, Dict, Optional

from django.db.models import QuerySet
from django.utils import timezone

from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from .pagination import StandardPagination

logger = logging.getLogger(__name__)


# =============================================================================
# STANDARD RESPONSE HELPERS
# =============================================================================

class APIResponse:
    """
    Standardized API response format for consistent client handling.

    All responses follow this structure:
    {
        "success": bool,
        "data": {...} | [...],
        "message": str | null,
        "errors": [...] | null,
        "meta": {
            "timestamp": "ISO8601",
            "warnings": [...],          # only when the write raised warnings
            "pagination": {...} | null
        }
    }
    """

    @staticmethod
    def success(
        data: Any = None,
        message: str = None,
        status_code: int = status.HTTP_200_OK,
        meta: Dict = None,
        headers: Dict = None,
        request: Request = None
    ) -> Response:
        """Create a successful response."""
        response_meta = {
            "timestamp": timezone.now().isoformat(),
            **(meta or {})
        }

        if request and hasattr(request, 'request_id'):
            response_meta["request_id"] = request.request_id

        response_data = {
            "success": True,
            "data": data,
            "message": message,
            "errors": None,
            "meta": response_meta
        }
        return Response(response_data, status=status_code, headers=headers)

    @staticmethod
    def created(
        data: Any = None,
        message: str = "Resource created successfully",
        meta: Dict = None
    ) -> Response:
        """Create a 201 Created response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
            meta=meta
        )

    @staticmethod
    def updated(
        data: Any = None,
        message: str = "Resource updated successfully",
        meta: Dict = None
    ) -> Response:
        """Create a successful update response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_200_OK,
            meta=meta
        )

    @staticmethod
    def deleted() -> Response:
        """Create a 204 No Content response for deletions."""
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# TENANT-AWARE BASE CLASSES
# =============================================================================

class TenantContextMixin:
    """
    Mixin providing tenant context utilities for views.
    """

    def get_tenant(self) -> Optional[Any]:
        """Get the current tenant from request."""
        return getattr(self.request, 'tenant', None)

    def get_tenant_or_404(self) -> Any:
        """Get the current tenant or raise NotFound."""
        tenant = self.get_tenant()
        if not tenant:
            raise NotFound("No tenant context found. Send the tenant in the request headers.")
        return tenant

    def add_tenant_to_serializer_context(self, context: Dict) -> Dict:
        """Add tenant to serializer context."""
        context['tenant'] = self.get_tenant()
        context['user'] = self.request.user
        return context


class TenantAwareViewSet(TenantContextMixin, ModelViewSet):
    """
    Base ModelViewSet with tenant awareness and automatic scoping.

    Provides:
    - Automatic queryset filtering by tenant
    - Tenant context in serializers
    - Standardized response format
    - Read/response hooks for subclasses

    Subclasses may override:
    - tenant_field: Field name for tenant FK (default: 'tenant')
    - prepare_instances(): called on every row set before serialization
    - get_response_meta(): extra keys merged into the response meta
    """

    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    tenant_field = 'tenant'

    def get_queryset(self) -> QuerySet:
        """
        Filter queryset to current tenant.
        Override this method for custom tenant filtering logic.
        """
        queryset = super().get_queryset()
        tenant = self.get_tenant()

        if not tenant:
            logger.warning(
                f"No tenant context for {self.__class__.__name__}. "
                "Returning empty queryset."
            )
            return queryset.none()

        if self.tenant_field:
            filter_kwargs = {self.tenant_field: tenant}
            queryset = queryset.filter(**filter_kwargs)

        return queryset

    def get_serializer_context(self) -> Dict:
        """Add tenant to serializer context."""
        context = super().get_serializer_context()
        return self.add_tenant_to_serializer_context(context)

    def prepare_instances(self, instances):
        """Hook to enrich one instance or a list of instances before serialization."""
        return instances

    def get_response_meta(self) -> Dict:
        """Hook for extra response meta (warnings, etc.)."""
        return {}

    def perform_create(self, serializer):
        """
        Create with tenant context.
        """
        tenant = self.get_tenant()
        if tenant and self.tenant_field == 'tenant':
            serializer.save(tenant=tenant)
        else:
            serializer.save()

    def create(self, request, *args, **kwargs):
        """Override to return standardized response."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        self.prepare_instances(serializer.instance)
        return APIResponse.created(
            data=serializer.data,
            message=f"{self.get_model_name()} created successfully",
            meta=self.get_response_meta()
        )

    def update(self, request, *args, **kwargs):
        """Override to return standardized response."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        self.prepare_instances(serializer.instance)
        return APIResponse.updated(
            data=serializer.data,
            message=f"{self.get_model_name()} updated successfully",
            meta=self.get_response_meta()
        )

    def destroy(self, request, *args, **kwargs):
        """Override to return standardized response."""
        instance = self.get_object()
        self.perform_destroy(instance)
        return APIResponse.deleted()

    def list(self, request, *args, **kwargs):
        """Override to return standardized paginated response."""
        queryset = self.filter_queryset(self.get_queryset())

        page = self.paginate_queryset(queryset)
        if page is not None:
            self.prepare_instances(page)
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        rows = list(queryset)
        self.prepare_instances(rows)
        serializer = self.get_serializer(rows, many=True)
        return APIResponse.success(data=serializer.data)

    def retrieve(self, request, *args, **kwargs):
        """Override to return standardized response."""
        instance = self.get_object()
        self.prepare_instances(instance)
        serializer = self.get_serializer(instance)
        return APIResponse.success(data=serializer.data)

    def get_model_name(self) -> str:
        """Get human-readable model name for messages."""
        if hasattr(self, 'queryset') and self.queryset is not None:
            return self.queryset.model._meta.verbose_name.title()
        return "Resource"
