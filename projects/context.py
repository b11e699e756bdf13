"""
ServiceRequest - what a ProjectService hook gets to see of the HTTP request.

Built by the viewsets from the DRF request once authorization has passed.
"""

from typing import Any, Dict, List, Optional

from api.exceptions import BusinessRuleError


class ServiceRequest:
    """
    Payload, caller and tenant for one service call.

    `error()` aborts the call by raising BusinessRuleError; `warn()` collects
    messages that are returned alongside a successful response.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, user=None, tenant=None):
        self.data = dict(data or {})
        self.user = user
        self.tenant = tenant
        self.warnings: List[str] = []

    @classmethod
    def from_drf(cls, request, data=None):
        return cls(
            data=request.data if data is None else data,
            user=request.user,
            tenant=getattr(request, 'tenant', None),
        )

    def error(self, status_code: int, message: str):
        raise BusinessRuleError(detail=message, status_code=status_code)

    def warn(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def __repr__(self):
        return f"<ServiceRequest keys={sorted(self.data)} warnings={len(self.warnings)}>"
