"""
Projects Services - Business rules for projects and tasks.

This module provides:
- Pre-write validation hooks called by the viewsets before saving
- Post-read hooks that attach derived fields to loaded rows
- The task and budget workflow operations

ProjectService never touches the ORM directly; all reads and writes go
through the ProjectStore it is constructed with. Roles are checked by the
DRF permission classes before any of this runs.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from django.utils import timezone
from rest_framework import status

from api.exceptions import ResourceNotFoundError
from tenants.logging import audit_logger

from . import derivations
from .context import ServiceRequest
from .models import Project, Task
from .store import ProjectStore

logger = logging.getLogger(__name__)


def _as_list(rows) -> list:
    """One instance or an iterable of instances, without the Nones."""
    if rows is None:
        return []
    if isinstance(rows, (Project, Task)):
        return [rows]
    return [row for row in rows if row is not None]


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or value == '':
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Not a number: {value!r}")


class ProjectService:
    """
    Domain logic for projects and tasks within one tenant.

    Usage:
        service = ProjectService(ProjectStore(tenant=request.tenant), user=request.user)
        result = service.complete_task(task_id)
    """

    def __init__(self, store: ProjectStore, user=None):
        self.store = store
        self.user = user

    # =========================================================================
    # PRE-WRITE VALIDATION
    # =========================================================================

    def before_project_write(self, req: ServiceRequest, instance: Optional[Project] = None) -> None:
        """
        Validate a project create (instance is None) or update.

        Dates and the budget warning use the merged state: stored values
        overlaid with the payload.
        """
        data = req.data

        def merged(field):
            if field in data:
                return data[field]
            return getattr(instance, field, None) if instance is not None else None

        start_date = merged('start_date')
        end_date = merged('end_date')
        if start_date and end_date and end_date < start_date:
            req.error(status.HTTP_400_BAD_REQUEST, 'End date must be after start date')

        budget = _to_decimal(data.get('budget'))
        if budget is not None and budget < 0:
            req.error(status.HTTP_400_BAD_REQUEST, 'Budget cannot be negative')

        actual_cost = _to_decimal(data.get('actual_cost'))
        if actual_cost is not None and actual_cost < 0:
            req.error(status.HTTP_400_BAD_REQUEST, 'Actual cost cannot be negative')

        if derivations.cost_exceeds_budget(_to_decimal(merged('budget')), _to_decimal(merged('actual_cost'))):
            req.warn('Actual cost exceeds budget')

    def before_task_write(self, req: ServiceRequest) -> None:
        """Validate a task create or update payload."""
        data = req.data

        estimated_hours = _to_decimal(data.get('estimated_hours'))
        if estimated_hours is not None and estimated_hours < 0:
            req.error(status.HTTP_400_BAD_REQUEST, 'Estimated hours cannot be negative')

        actual_hours = _to_decimal(data.get('actual_hours'))
        if actual_hours is not None and actual_hours < 0:
            req.error(status.HTTP_400_BAD_REQUEST, 'Actual hours cannot be negative')

        project_id = data.get('project_id')
        if project_id and not self.store.project_exists(project_id):
            req.error(status.HTTP_404_NOT_FOUND, f'Project with ID {project_id} not found')

    def before_project_delete(self, req: ServiceRequest, project_id) -> None:
        """Refuse to delete a project that still has open tasks."""
        open_tasks = self.store.count_open_tasks(project_id)
        if open_tasks > 0:
            req.error(
                status.HTTP_400_BAD_REQUEST,
                f'Cannot delete project with {open_tasks} active task(s). '
                f'Complete or reassign them first.'
            )

    # =========================================================================
    # POST-READ DERIVATION
    # =========================================================================

    def after_project_read(self, projects):
        """
        Attach total_tasks, completed_tasks, completion_rate and
        remaining_budget to one project or a batch of projects.

        Task statuses for the whole batch come from a single store call.
        """
        rows = _as_list(projects)
        if not rows:
            return projects

        statuses = self.store.task_statuses([project.pk for project in rows])
        for project in rows:
            project_statuses = statuses.get(project.pk, [])
            total = len(project_statuses)
            completed = derivations.count_completed(project_statuses)

            project.total_tasks = total
            project.completed_tasks = completed
            project.completion_rate = derivations.completion_rate(completed, total)
            project.remaining_budget = derivations.remaining_budget(project.budget, project.actual_cost)

        return projects

    def after_task_read(self, tasks):
        """Attach is_overdue to one task or a batch of tasks."""
        today = timezone.localdate()
        for task in _as_list(tasks):
            task.is_overdue = derivations.is_overdue(task.status, task.due_date, today)
        return tasks

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def complete_task(self, task_id) -> Dict[str, Any]:
        """
        Mark a task DONE and stamp completed_at.

        Missing and already completed tasks are soft failures.
        """
        task = self.store.get_task(task_id)
        if task is None:
            return {'success': False, 'message': f'Task with ID {task_id} not found'}

        if task.status == Task.Status.DONE:
            return {'success': False, 'message': 'Task is already completed'}

        self.store.update_task(task.pk, status=Task.Status.DONE, completed_at=timezone.now())

        audit_logger.log_action(
            action='complete',
            resource_type='task',
            resource_id=str(task.pk),
            user=self.user,
            details={'previous_status': task.status},
        )
        logger.info(f"Task {task.pk} completed")
        return {'success': True, 'message': f'Task "{task.title}" marked as completed'}

    def assign_task(self, task_id, assigned_to) -> Dict[str, Any]:
        """
        Assign a task; a TODO task moves to IN_PROGRESS.

        A blank assignee is refused before the task is even looked up.
        """
        if assigned_to is None or not str(assigned_to).strip():
            return {'success': False, 'message': 'Assignee name cannot be empty'}

        task = self.store.get_task(task_id)
        if task is None:
            return {'success': False, 'message': f'Task with ID {task_id} not found'}

        new_status = Task.Status.IN_PROGRESS if task.status == Task.Status.TODO else task.status
        self.store.update_task(task.pk, assigned_to=assigned_to, status=new_status)

        audit_logger.log_action(
            action='assign',
            resource_type='task',
            resource_id=str(task.pk),
            user=self.user,
            details={'assigned_to': assigned_to, 'status': new_status},
        )
        return {'success': True, 'message': f'Task "{task.title}" assigned to {assigned_to}'}

    def update_project_budget(
        self,
        project_id,
        new_budget=None,
        additional_cost=None,
        req: Optional[ServiceRequest] = None,
    ) -> Dict[str, Any]:
        """
        Replace the budget and/or add to the actual cost.

        Returns success, message and the remaining budget (None when the
        project ends up without a budget). Refusals leave the row untouched.
        When `req` is given, the cost-exceeds-budget warning is added to it.
        """
        project = self.store.get_project(project_id)
        if project is None:
            return {
                'success': False,
                'message': f'Project with ID {project_id} not found',
                'remaining_budget': Decimal('0'),
            }

        stored_remaining = derivations.remaining_budget(project.budget, project.actual_cost)

        new_budget = _to_decimal(new_budget)
        if new_budget is not None and new_budget < 0:
            return {
                'success': False,
                'message': 'Budget cannot be negative',
                'remaining_budget': stored_remaining,
            }

        updated_budget = new_budget if new_budget is not None else project.budget
        updated_cost = (project.actual_cost or Decimal('0')) + (_to_decimal(additional_cost) or Decimal('0'))
        if updated_cost < 0:
            return {
                'success': False,
                'message': 'Actual cost cannot be negative',
                'remaining_budget': stored_remaining,
            }

        self.store.update_project(project.pk, budget=updated_budget, actual_cost=updated_cost)

        if req is not None and derivations.cost_exceeds_budget(updated_budget, updated_cost):
            req.warn('Actual cost exceeds budget')

        audit_logger.log_action(
            action='update_budget',
            resource_type='project',
            resource_id=str(project.pk),
            user=self.user,
            details={
                'budget': str(updated_budget) if updated_budget is not None else None,
                'actual_cost': str(updated_cost),
            },
        )
        return {
            'success': True,
            'message': f'Budget updated for project "{project.name}"',
            'remaining_budget': derivations.remaining_budget(updated_budget, updated_cost),
        }

    def get_project_stats(self, project_id) -> Dict[str, int]:
        """
        Task counts for one project.

        Raises:
            ResourceNotFoundError: the project does not exist in this tenant.
        """
        project = self.store.get_project(project_id)
        if project is None:
            raise ResourceNotFoundError('Project', project_id)

        tasks = self.store.tasks_for_project(project.pk)
        total = len(tasks)
        completed = derivations.count_completed(task.status for task in tasks)

        return {
            'total_tasks': total,
            'completed_tasks': completed,
            'completion_rate': derivations.completion_rate(completed, total),
            'overdue_tasks': derivations.count_overdue(tasks, timezone.localdate()),
        }
