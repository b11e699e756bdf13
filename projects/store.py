"""
ProjectStore - tenant-scoped data access for ProjectService.

The service never queries the ORM itself; everything it reads or writes
goes through one of these methods. Ids that are not valid UUIDs are
treated as missing rows.
"""

import logging
import uuid
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from django.utils import timezone

from .models import Project, Task

logger = logging.getLogger(__name__)


def _as_uuid(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class ProjectStore:
    """
    Persistence collaborator bound to one tenant.

    A store built with `tenant=None` sees every tenant's rows; only
    management code should do that.
    """

    def __init__(self, tenant=None):
        self.tenant = tenant

    def _projects(self):
        qs = Project.objects.all()
        if self.tenant is not None:
            qs = qs.filter(tenant=self.tenant)
        return qs

    def _tasks(self):
        qs = Task.objects.all()
        if self.tenant is not None:
            qs = qs.filter(tenant=self.tenant)
        return qs

    # Reads

    def get_project(self, project_id) -> Optional[Project]:
        pk = _as_uuid(project_id)
        if pk is None:
            return None
        return self._projects().filter(pk=pk).first()

    def get_task(self, task_id) -> Optional[Task]:
        pk = _as_uuid(task_id)
        if pk is None:
            return None
        return self._tasks().filter(pk=pk).first()

    def project_exists(self, project_id) -> bool:
        pk = _as_uuid(project_id)
        if pk is None:
            return False
        return self._projects().filter(pk=pk).exists()

    def tasks_for_project(self, project_id) -> List[Task]:
        pk = _as_uuid(project_id)
        if pk is None:
            return []
        return list(self._tasks().filter(project_id=pk).only('id', 'status', 'due_date'))

    def task_statuses(self, project_ids: Iterable) -> Dict[uuid.UUID, List[str]]:
        """
        Map each project id to the statuses of its tasks, in one query.

        Projects without tasks are absent from the result.
        """
        pks = {pk for pk in (_as_uuid(p) for p in project_ids) if pk is not None}
        if not pks:
            return {}

        statuses = defaultdict(list)
        rows = self._tasks().filter(project_id__in=pks).values_list('project_id', 'status')
        for project_id, status in rows:
            statuses[project_id].append(status)
        return dict(statuses)

    def count_open_tasks(self, project_id) -> int:
        pk = _as_uuid(project_id)
        if pk is None:
            return 0
        return self._tasks().filter(project_id=pk).exclude(status=Task.Status.DONE).count()

    # Writes

    def update_task(self, task_id, **fields) -> int:
        """Overwrite the named fields of one task. Returns the number of rows changed."""
        pk = _as_uuid(task_id)
        if pk is None:
            return 0
        fields.setdefault('updated_at', timezone.now())
        updated = self._tasks().filter(pk=pk).update(**fields)
        logger.debug(f"update_task {pk}: {sorted(fields)} ({updated} row)")
        return updated

    def update_project(self, project_id, **fields) -> int:
        """Overwrite the named fields of one project. Returns the number of rows changed."""
        pk = _as_uuid(project_id)
        if pk is None:
            return 0
        fields.setdefault('updated_at', timezone.now())
        updated = self._projects().filter(pk=pk).update(**fields)
        logger.debug(f"update_project {pk}: {sorted(fields)} ({updated} row)")
        return updated
