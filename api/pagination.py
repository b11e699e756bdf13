"""
API Pagination - Page-number pagination wrapped in the standard envelope.

Kept apart from api.base: DRF resolves DEFAULT_PAGINATION_CLASS while
rest_framework.generics is still being imported, so this module may only
depend on rest_framework.pagination and rest_framework.response.
"""

from django.utils import timezone

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """
    Standard page-number based pagination with configurable page size.

    Query params:
    - page: Page number (1-indexed)
    - page_size: Items per page (default: 20, max: 100)
    """
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            "success": True,
            "data": data,
            "message": None,
            "errors": None,
            "meta": {
                "timestamp": timezone.now().isoformat(),
                "pagination": {
                    "count": self.page.paginator.count,
                    "page": self.page.number,
                    "page_size": self.get_page_size(self.request),
                    "total_pages": self.page.paginator.num_pages,
                    "next": self.get_next_link(),
                    "previous": self.get_previous_link(),
                }
            }
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': schema,
                'message': {'type': 'string', 'nullable': True},
                'errors': {'type': 'array', 'nullable': True, 'items': {}},
                'meta': {'type': 'object'},
            },
        }
