"""
Projects API Views - REST API endpoints.

This module provides REST API views using Django Rest Framework:
- ViewSets for project and task CRUD
- Workflow actions (complete, assign, update-budget, stats)
- Filtering, search, and pagination
- Role-based access control per action

Every write passes through ProjectService validation and every read gets
its derived fields from ProjectService before serialization.
API URL namespace: api:projects:*
"""

import logging

from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from rest_framework import filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from accounts.permissions import (
    CanManageProjects,
    IsTaskAssigneeOrManager,
    IsTenantUser,
    TenantObjectPermission,
)
from api.exceptions import PlanLimitExceededError
from core.viewsets import SecureTenantViewSet
from tenants.services import TenantService

from ..context import ServiceRequest
from ..filters import ProjectFilter, TaskFilter
from ..models import Project, Task
from ..services import ProjectService
from ..store import ProjectStore
from .serializers import (
    ActionResultSerializer,
    AssignTaskInputSerializer,
    BudgetResultSerializer,
    CompleteTaskInputSerializer,
    ProjectSerializer,
    ProjectStatsQuerySerializer,
    ProjectStatsSerializer,
    TaskSerializer,
    UpdateBudgetInputSerializer,
)

logger = logging.getLogger(__name__)

READ = [IsAuthenticated, IsTenantUser, TenantObjectPermission]
MANAGE = [IsAuthenticated, IsTenantUser, CanManageProjects, TenantObjectPermission]
WORK_ON_TASK = [IsAuthenticated, IsTenantUser, IsTaskAssigneeOrManager, TenantObjectPermission]


class ProjectServiceViewMixin:
    """
    Builds a ProjectService for the current request and carries its
    warnings into the response meta.
    """

    def get_service(self) -> ProjectService:
        return ProjectService(ProjectStore(tenant=self.get_tenant()), user=self.request.user)

    def get_service_request(self, data=None) -> ServiceRequest:
        req = ServiceRequest.from_drf(self.request, data=data)
        self._service_request = req
        return req

    def get_response_meta(self):
        req = getattr(self, '_service_request', None)
        if req is not None and req.warnings:
            return {'warnings': list(req.warnings)}
        return {}


# ============================================================================
# PROJECT VIEWSET
# ============================================================================

@extend_schema_view(
    list=extend_schema(summary="List projects", tags=['Projects']),
    retrieve=extend_schema(summary="Get a project", tags=['Projects']),
    create=extend_schema(summary="Create a project", tags=['Projects']),
    update=extend_schema(summary="Replace a project", tags=['Projects']),
    partial_update=extend_schema(summary="Update a project", tags=['Projects']),
    destroy=extend_schema(
        summary="Delete a project",
        description="Refused while the project has tasks that are not DONE.",
        tags=['Projects'],
    ),
)
class ProjectViewSet(ProjectServiceViewMixin, SecureTenantViewSet):
    """
    ViewSet for projects.

    Provides:
    - list: GET /api/v1/projects/
    - retrieve: GET /api/v1/projects/{id}/
    - create: POST /api/v1/projects/
    - update: PUT /api/v1/projects/{id}/
    - partial_update: PATCH /api/v1/projects/{id}/
    - destroy: DELETE /api/v1/projects/{id}/

    Custom actions:
    - update_budget: POST /api/v1/projects/update-budget/
    - stats: GET /api/v1/projects/stats/?project_id=<id>

    Filtering:
    - ?status=ACTIVE
    - ?over_budget=true
    - ?budget_min=100&budget_max=5000

    Search:
    - ?search=keyword (searches name, description)

    Ordering:
    - ?ordering=-created_at
    - ?ordering=end_date
    """

    queryset = Project.objects.select_related('created_by', 'updated_by')
    serializer_class = ProjectSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ProjectFilter
    search_fields = ['name', 'description']
    ordering_fields = ['created_at', 'updated_at', 'name', 'start_date', 'end_date', 'budget', 'actual_cost']
    ordering = ['-created_at']

    action_permissions = {
        'list': READ,
        'retrieve': READ,
        'stats': READ,
        'create': MANAGE,
        'update': MANAGE,
        'partial_update': MANAGE,
        'destroy': MANAGE,
        'update_budget': MANAGE,
    }

    def prepare_instances(self, instances):
        return self.get_service().after_project_read(instances)

    def perform_create(self, serializer):
        tenant = self.get_tenant_or_404()
        if not TenantService.check_limit(tenant, 'projects'):
            raise PlanLimitExceededError(
                limit_name='projects',
                current_usage=TenantService.get_usage(tenant)['projects'],
                max_allowed=tenant.plan.max_projects,
            )

        req = self.get_service_request(data=serializer.validated_data)
        self.get_service().before_project_write(req)
        super().perform_create(serializer)

    def perform_update(self, serializer):
        req = self.get_service_request(data=serializer.validated_data)
        self.get_service().before_project_write(req, instance=serializer.instance)
        super().perform_update(serializer)

    def perform_destroy(self, instance):
        req = self.get_service_request(data={'id': instance.pk})
        self.get_service().before_project_delete(req, instance.pk)
        super().perform_destroy(instance)

    @extend_schema(
        summary="Adjust a project's budget",
        description=(
            "Replace the budget and/or add to the actual cost. Unknown projects "
            "and negative budgets are answered with success=false."
        ),
        request=UpdateBudgetInputSerializer,
        responses={200: BudgetResultSerializer},
        tags=['Projects'],
    )
    @action(detail=False, methods=['post'], url_path='update-budget')
    def update_budget(self, request):
        """
        POST /api/v1/projects/update-budget/

        Body: {"project_id": "...", "new_budget": "1200.00", "additional_cost": "300.00"}
        """
        serializer = UpdateBudgetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = self.get_service()
        project = service.store.get_project(data['project_id'])
        if project is not None:
            self.check_object_permissions(request, project)

        req = self.get_service_request(data=data)
        result = service.update_project_budget(
            data['project_id'],
            new_budget=data.get('new_budget'),
            additional_cost=data.get('additional_cost'),
            req=req,
        )
        if req.warnings:
            result['warnings'] = list(req.warnings)
        return Response(BudgetResultSerializer(result).data)

    @extend_schema(
        summary="Task statistics for a project",
        parameters=[
            OpenApiParameter('project_id', str, required=True, description='Project ID'),
        ],
        responses={200: ProjectStatsSerializer},
        tags=['Projects'],
    )
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        GET /api/v1/projects/stats/?project_id=<id>

        Unknown projects are a 404, unlike the other actions.
        """
        serializer = ProjectStatsQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        stats = self.get_service().get_project_stats(serializer.validated_data['project_id'])
        return Response(ProjectStatsSerializer(stats).data)


# ============================================================================
# TASK VIEWSET
# ============================================================================

@extend_schema_view(
    list=extend_schema(summary="List tasks", tags=['Tasks']),
    retrieve=extend_schema(summary="Get a task", tags=['Tasks']),
    create=extend_schema(summary="Create a task", tags=['Tasks']),
    update=extend_schema(summary="Replace a task", tags=['Tasks']),
    partial_update=extend_schema(summary="Update a task", tags=['Tasks']),
    destroy=extend_schema(summary="Delete a task", tags=['Tasks']),
)
class TaskViewSet(ProjectServiceViewMixin, SecureTenantViewSet):
    """
    ViewSet for tasks.

    Provides:
    - list: GET /api/v1/tasks/
    - retrieve: GET /api/v1/tasks/{id}/
    - create: POST /api/v1/tasks/
    - update: PUT /api/v1/tasks/{id}/
    - partial_update: PATCH /api/v1/tasks/{id}/
    - destroy: DELETE /api/v1/tasks/{id}/

    Custom actions:
    - complete: POST /api/v1/tasks/complete/
    - assign: POST /api/v1/tasks/assign/

    Members may only edit or complete tasks assigned to them.

    Filtering:
    - ?status=TODO&status=IN_PROGRESS
    - ?priority=HIGH
    - ?project=<id>
    - ?assigned_to=alice
    - ?overdue=true
    """

    queryset = Task.objects.all()
    serializer_class = TaskSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = TaskFilter
    search_fields = ['title', 'description', 'assigned_to']
    ordering_fields = ['created_at', 'updated_at', 'due_date', 'priority', 'status', 'title']
    ordering = ['-created_at']

    action_permissions = {
        'list': READ,
        'retrieve': READ,
        'create': MANAGE,
        'destroy': MANAGE,
        'assign': MANAGE,
        'update': WORK_ON_TASK,
        'partial_update': WORK_ON_TASK,
        'complete': WORK_ON_TASK,
    }

    def prepare_instances(self, instances):
        return self.get_service().after_task_read(instances)

    def perform_create(self, serializer):
        req = self.get_service_request(data=serializer.validated_data)
        self.get_service().before_task_write(req)
        super().perform_create(serializer)

    def perform_update(self, serializer):
        req = self.get_service_request(data=serializer.validated_data)
        self.get_service().before_task_write(req)
        super().perform_update(serializer)

    def _check_task_permissions(self, service, task_id):
        task = service.store.get_task(task_id)
        if task is not None:
            self.check_object_permissions(self.request, task)

    @extend_schema(
        summary="Mark a task as completed",
        description="Unknown and already completed tasks are answered with success=false.",
        request=CompleteTaskInputSerializer,
        responses={200: ActionResultSerializer},
        tags=['Tasks'],
    )
    @action(detail=False, methods=['post'])
    def complete(self, request):
        """
        POST /api/v1/tasks/complete/

        Body: {"task_id": "..."}
        """
        serializer = CompleteTaskInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task_id = serializer.validated_data['task_id']

        service = self.get_service()
        self._check_task_permissions(service, task_id)
        return Response(service.complete_task(task_id))

    @extend_schema(
        summary="Assign a task",
        description="A TODO task moves to IN_PROGRESS. Blank assignees are refused with success=false.",
        request=AssignTaskInputSerializer,
        responses={200: ActionResultSerializer},
        tags=['Tasks'],
    )
    @action(detail=False, methods=['post'])
    def assign(self, request):
        """
        POST /api/v1/tasks/assign/

        Body: {"task_id": "...", "assigned_to": "alice"}
        """
        serializer = AssignTaskInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = self.get_service()
        self._check_task_permissions(service, data['task_id'])
        return Response(service.assign_task(data['task_id'], data.get('assigned_to')))
