"""
Accounts Permissions - Role-based permission classes for the tenant API.

BASIC PERMISSIONS:
- IsTenantUser: Active membership of request.tenant

ROLE-BASED:
- CanManageProjects: Owner, Admin or Manager
- IsTaskAssigneeOrManager: Managers, or the member a task is assigned to

OBJECT-LEVEL:
- TenantObjectPermission: Tenant-scoped objects

The membership lookup is cached on the request, so stacking several of
these classes costs one query.
"""

from typing import Optional

from rest_framework import permissions

from .models import TenantUser


_MEMBERSHIP_CACHE_ATTR = '_tenant_membership'


def get_membership(request) -> Optional[TenantUser]:
    """
    Return the caller's active membership of request.tenant, or None.
    """
    if not request.user or not request.user.is_authenticated:
        return None

    tenant = getattr(request, 'tenant', None)
    if not tenant:
        return None

    cached = getattr(request, _MEMBERSHIP_CACHE_ATTR, None)
    if cached is not None and cached[0] == tenant.pk:
        return cached[1]

    membership = TenantUser.objects.filter(
        user=request.user,
        tenant=tenant,
        is_active=True
    ).first()
    setattr(request, _MEMBERSHIP_CACHE_ATTR, (tenant.pk, membership))
    return membership


class IsTenantUser(permissions.BasePermission):
    """
    Permission check for users who are members of the current tenant.

    Requires:
    - User to be authenticated
    - User to have an active TenantUser membership for request.tenant
    """
    message = "You must be a member of this organization to access this resource."

    def has_permission(self, request, view):
        return get_membership(request) is not None

    def has_object_permission(self, request, view, obj):
        if hasattr(obj, 'tenant_id'):
            tenant = getattr(request, 'tenant', None)
            return tenant is not None and obj.tenant_id == tenant.id
        return self.has_permission(request, view)


class CanManageProjects(permissions.BasePermission):
    """
    Owners, admins and managers may change projects and assign tasks.
    """
    message = "You do not have permission to manage projects in this organization."

    def has_permission(self, request, view):
        membership = get_membership(request)
        return membership is not None and membership.can_manage_projects


class IsTaskAssigneeOrManager(permissions.BasePermission):
    """
    Task edits and completion.

    Managers may act on any task. A MEMBER may only act on tasks whose
    `assigned_to` equals their username. Viewers never pass.
    """
    message = "You can only update tasks assigned to you."

    def has_permission(self, request, view):
        membership = get_membership(request)
        return membership is not None and membership.can_write

    def has_object_permission(self, request, view, obj):
        membership = get_membership(request)
        if membership is None:
            return False
        if membership.can_manage_projects:
            return True
        if membership.role != TenantUser.UserRole.MEMBER:
            return False
        return bool(obj.assigned_to) and obj.assigned_to == request.user.get_username()


class TenantObjectPermission(permissions.BasePermission):
    """
    Object-level permission for tenant-scoped objects.

    Ensures objects belong to the current tenant context.

    Usage:
        class MyView(APIView):
            permission_classes = [TenantObjectPermission]
            tenant_field = 'tenant'  # Default
    """
    message = "This resource does not belong to your organization."

    def has_object_permission(self, request, view, obj):
        tenant = getattr(request, 'tenant', None)
        if not tenant:
            return False

        tenant_field = getattr(view, 'tenant_field', 'tenant')

        # Handle nested field access
        obj_tenant = obj
        for field in tenant_field.split('.'):
            obj_tenant = getattr(obj_tenant, field, None)
            if obj_tenant is None:
                return False

        return obj_tenant == tenant or obj_tenant.id == tenant.id
