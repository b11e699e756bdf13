"""
ProjectService Tests

Tests for:
- Pre-write validation of projects and tasks
- Delete protection for projects with open tasks
- Derived fields attached on read
- complete_task, assign_task, update_project_budget and get_project_stats
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from api.exceptions import BusinessRuleError, ResourceNotFoundError
from projects.context import ServiceRequest
from projects.models import Task
from projects.services import ProjectService
from projects.store import ProjectStore


@pytest.fixture
def service(tenant):
    return ProjectService(ProjectStore(tenant=tenant))


def _today():
    return timezone.localdate()


# ============================================================================
# PRE-WRITE VALIDATION
# ============================================================================

@pytest.mark.django_db
class TestBeforeProjectWrite:
    """Tests for project create/update validation."""

    def test_end_before_start_rejected(self, service):
        req = ServiceRequest({'start_date': _today(), 'end_date': _today() - timedelta(days=1)})

        with pytest.raises(BusinessRuleError) as exc:
            service.before_project_write(req)

        assert exc.value.status_code == 400
        assert str(exc.value.detail) == 'End date must be after start date'

    def test_equal_dates_accepted(self, service):
        req = ServiceRequest({'start_date': _today(), 'end_date': _today()})
        service.before_project_write(req)
        assert req.warnings == []

    def test_only_one_date_accepted(self, service):
        service.before_project_write(ServiceRequest({'end_date': _today()}))
        service.before_project_write(ServiceRequest({'start_date': _today()}))

    def test_update_checks_against_stored_dates(self, service, project):
        req = ServiceRequest({'end_date': project.start_date - timedelta(days=1)})

        with pytest.raises(BusinessRuleError):
            service.before_project_write(req, instance=project)

    def test_negative_budget_rejected(self, service):
        with pytest.raises(BusinessRuleError) as exc:
            service.before_project_write(ServiceRequest({'budget': Decimal('-1')}))
        assert str(exc.value.detail) == 'Budget cannot be negative'

    def test_negative_actual_cost_rejected(self, service):
        with pytest.raises(BusinessRuleError) as exc:
            service.before_project_write(ServiceRequest({'actual_cost': Decimal('-0.01')}))
        assert str(exc.value.detail) == 'Actual cost cannot be negative'

    def test_cost_over_budget_warns(self, service):
        req = ServiceRequest({'budget': Decimal('100'), 'actual_cost': Decimal('150')})
        service.before_project_write(req)
        assert req.warnings == ['Actual cost exceeds budget']

    def test_cost_over_stored_budget_warns_on_update(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('500'))
        req = ServiceRequest({'actual_cost': Decimal('600')})

        service.before_project_write(req, instance=project)

        assert req.warnings == ['Actual cost exceeds budget']

    def test_no_budget_never_warns(self, service):
        req = ServiceRequest({'budget': None, 'actual_cost': Decimal('600')})
        service.before_project_write(req)
        assert req.warnings == []


@pytest.mark.django_db
class TestBeforeTaskWrite:
    """Tests for task create/update validation."""

    def test_negative_estimated_hours(self, service):
        with pytest.raises(BusinessRuleError) as exc:
            service.before_task_write(ServiceRequest({'estimated_hours': Decimal('-2')}))
        assert str(exc.value.detail) == 'Estimated hours cannot be negative'

    def test_negative_actual_hours(self, service):
        with pytest.raises(BusinessRuleError) as exc:
            service.before_task_write(ServiceRequest({'actual_hours': Decimal('-2')}))
        assert str(exc.value.detail) == 'Actual hours cannot be negative'

    def test_zero_hours_accepted(self, service):
        service.before_task_write(ServiceRequest({'estimated_hours': 0, 'actual_hours': 0}))

    def test_unknown_project_is_404(self, service, project, other_tenant):
        foreign = ProjectService(ProjectStore(tenant=other_tenant))

        with pytest.raises(BusinessRuleError) as exc:
            foreign.before_task_write(ServiceRequest({'project_id': project.pk}))

        assert exc.value.status_code == 404
        assert exc.value.error_code == 'NOT_FOUND'
        assert str(exc.value.detail) == f'Project with ID {project.pk} not found'

    def test_known_project_accepted(self, service, project):
        service.before_task_write(ServiceRequest({'project_id': project.pk}))

    def test_no_project_accepted(self, service):
        service.before_task_write(ServiceRequest({'project_id': None}))


@pytest.mark.django_db
class TestBeforeProjectDelete:
    """Tests for delete protection."""

    def test_open_tasks_block_delete(self, service, project, task_factory):
        task_factory(project=project, status='TODO')
        task_factory(project=project, status='IN_REVIEW')
        task_factory(project=project, status='DONE')

        with pytest.raises(BusinessRuleError) as exc:
            service.before_project_delete(ServiceRequest(), project.pk)

        assert exc.value.status_code == 400
        assert '2 active task(s)' in str(exc.value.detail)

    def test_only_done_tasks_allows_delete(self, service, project, task_factory):
        task_factory(project=project, status='DONE')
        service.before_project_delete(ServiceRequest(), project.pk)

    def test_no_tasks_allows_delete(self, service, project):
        service.before_project_delete(ServiceRequest(), project.pk)


# ============================================================================
# POST-READ DERIVATION
# ============================================================================

@pytest.mark.django_db
class TestAfterRead:
    """Tests for derived fields."""

    def test_project_fields(self, service, project_factory, task_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('1000'), actual_cost=Decimal('250'))
        for status in ['DONE', 'TODO', 'TODO']:
            task_factory(project=project, status=status)

        service.after_project_read(project)

        assert project.total_tasks == 3
        assert project.completed_tasks == 1
        assert project.completion_rate == 33
        assert project.remaining_budget == Decimal('750')

    def test_project_without_tasks_or_budget(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=None)

        service.after_project_read([project])

        assert project.total_tasks == 0
        assert project.completion_rate == 0
        assert project.remaining_budget is None

    def test_batch_uses_one_query(self, service, project_factory, task_factory, tenant, django_assert_num_queries):
        projects = [project_factory(tenant=tenant) for _ in range(3)]
        for project in projects:
            task_factory(project=project, status='DONE')

        with django_assert_num_queries(1):
            service.after_project_read(projects)

        assert all(p.completion_rate == 100 for p in projects)

    def test_empty_batch(self, service):
        assert service.after_project_read([]) == []
        assert service.after_project_read(None) is None

    def test_task_overdue_flag(self, service, task_factory, project):
        late = task_factory(project=project, status='TODO', due_date=_today() - timedelta(days=1))
        late_done = task_factory(project=project, status='DONE', due_date=_today() - timedelta(days=1))
        due_today = task_factory(project=project, status='TODO', due_date=_today())
        undated = task_factory(project=project, status='TODO', due_date=None)

        service.after_task_read([late, late_done, due_today, undated])

        assert late.is_overdue is True
        assert late_done.is_overdue is False
        assert due_today.is_overdue is False
        assert undated.is_overdue is False


# ============================================================================
# COMPLETE TASK
# ============================================================================

@pytest.mark.django_db
class TestCompleteTask:
    """Tests for complete_task."""

    def test_completes_open_task(self, service, task_factory, project):
        task = task_factory(project=project, status='IN_PROGRESS', title='Write docs')

        result = service.complete_task(task.pk)

        assert result == {'success': True, 'message': 'Task "Write docs" marked as completed'}
        task.refresh_from_db()
        assert task.status == Task.Status.DONE
        assert task.completed_at is not None

    def test_already_completed(self, service, task_factory, project):
        completed_at = timezone.now() - timedelta(days=2)
        task = task_factory(project=project, status='DONE', completed_at=completed_at)

        result = service.complete_task(task.pk)

        assert result == {'success': False, 'message': 'Task is already completed'}
        task.refresh_from_db()
        assert task.completed_at == completed_at

    def test_missing_task(self, service):
        result = service.complete_task('3f1c1f6e-0000-4000-8000-000000000000')
        assert result['success'] is False
        assert result['message'] == 'Task with ID 3f1c1f6e-0000-4000-8000-000000000000 not found'

    def test_task_in_other_tenant_is_missing(self, task_factory, other_tenant):
        task = task_factory(status='TODO')
        result = ProjectService(ProjectStore(tenant=other_tenant)).complete_task(task.pk)

        assert result['success'] is False
        task.refresh_from_db()
        assert task.status == 'TODO'


# ============================================================================
# ASSIGN TASK
# ============================================================================

@pytest.mark.django_db
class TestAssignTask:
    """Tests for assign_task."""

    def test_assign_todo_moves_to_in_progress(self, service, task_factory, project):
        task = task_factory(project=project, status='TODO', title='Fix login')

        result = service.assign_task(task.pk, 'Alice')

        assert result == {'success': True, 'message': 'Task "Fix login" assigned to Alice'}
        task.refresh_from_db()
        assert task.status == Task.Status.IN_PROGRESS
        assert task.assigned_to == 'Alice'

    @pytest.mark.parametrize('status', ['IN_REVIEW', 'BLOCKED', 'DONE'])
    def test_other_statuses_kept(self, service, task_factory, project, status):
        task = task_factory(project=project, status=status)

        assert service.assign_task(task.pk, 'Bob')['success'] is True

        task.refresh_from_db()
        assert task.status == status
        assert task.assigned_to == 'Bob'

    @pytest.mark.parametrize('assignee', ['', '   ', None])
    def test_blank_assignee_refused(self, service, task_factory, project, assignee):
        task = task_factory(project=project, status='TODO', assigned_to='')

        result = service.assign_task(task.pk, assignee)

        assert result == {'success': False, 'message': 'Assignee name cannot be empty'}
        task.refresh_from_db()
        assert task.status == 'TODO'
        assert task.assigned_to == ''

    def test_blank_assignee_checked_before_lookup(self, service):
        result = service.assign_task('not-a-task', '')
        assert result['message'] == 'Assignee name cannot be empty'

    def test_missing_task(self, service):
        result = service.assign_task('not-a-task', 'Alice')
        assert result == {'success': False, 'message': 'Task with ID not-a-task not found'}


# ============================================================================
# UPDATE PROJECT BUDGET
# ============================================================================

@pytest.mark.django_db
class TestUpdateProjectBudget:
    """Tests for update_project_budget."""

    def test_budget_and_cost(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('1000'), actual_cost=Decimal('0'))

        result = service.update_project_budget(
            project.pk, new_budget=Decimal('1200'), additional_cost=Decimal('300')
        )

        assert result['success'] is True
        assert result['remaining_budget'] == Decimal('900')
        project.refresh_from_db()
        assert project.budget == Decimal('1200')
        assert project.actual_cost == Decimal('300')

    def test_cost_only_keeps_budget(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('500'), actual_cost=Decimal('100'))

        result = service.update_project_budget(project.pk, additional_cost='50.25')

        assert result['remaining_budget'] == Decimal('349.75')
        project.refresh_from_db()
        assert project.budget == Decimal('500')
        assert project.actual_cost == Decimal('150.25')

    def test_costs_accumulate(self, service, project):
        service.update_project_budget(project.pk, additional_cost=Decimal('10'))
        service.update_project_budget(project.pk, additional_cost=Decimal('15'))

        project.refresh_from_db()
        assert project.actual_cost == Decimal('25')

    def test_negative_budget_refused(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('1000'), actual_cost=Decimal('200'))

        result = service.update_project_budget(project.pk, new_budget=Decimal('-5'), additional_cost=Decimal('10'))

        assert result == {
            'success': False,
            'message': 'Budget cannot be negative',
            'remaining_budget': Decimal('800'),
        }
        project.refresh_from_db()
        assert project.budget == Decimal('1000')
        assert project.actual_cost == Decimal('200')

    def test_negative_resulting_cost_refused(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('1000'), actual_cost=Decimal('20'))

        result = service.update_project_budget(project.pk, additional_cost=Decimal('-50'))

        assert result['success'] is False
        assert result['message'] == 'Actual cost cannot be negative'
        project.refresh_from_db()
        assert project.actual_cost == Decimal('20')

    def test_credit_within_cost_accepted(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('1000'), actual_cost=Decimal('200'))

        result = service.update_project_budget(project.pk, additional_cost=Decimal('-50'))

        assert result['success'] is True
        assert result['remaining_budget'] == Decimal('850')

    def test_missing_project(self, service):
        result = service.update_project_budget('missing', new_budget=Decimal('10'))

        assert result['success'] is False
        assert result['message'] == 'Project with ID missing not found'
        assert result['remaining_budget'] == Decimal('0')

    def test_unbudgeted_project(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=None)

        result = service.update_project_budget(project.pk, additional_cost=Decimal('10'))

        assert result['success'] is True
        assert result['remaining_budget'] is None

    def test_over_budget_warns(self, service, project_factory, tenant):
        project = project_factory(tenant=tenant, budget=Decimal('100'), actual_cost=Decimal('90'))
        req = ServiceRequest()

        result = service.update_project_budget(project.pk, additional_cost=Decimal('20'), req=req)

        assert result['success'] is True
        assert result['remaining_budget'] == Decimal('-10')
        assert req.warnings == ['Actual cost exceeds budget']


# ============================================================================
# PROJECT STATS
# ============================================================================

@pytest.mark.django_db
class TestGetProjectStats:
    """Tests for get_project_stats."""

    def test_counts(self, service, project, task_factory):
        yesterday = _today() - timedelta(days=1)
        task_factory(project=project, status='DONE', due_date=yesterday)
        task_factory(project=project, status='TODO', due_date=yesterday)
        task_factory(project=project, status='BLOCKED', due_date=None)
        task_factory(project=project, status='IN_PROGRESS', due_date=_today())

        stats = service.get_project_stats(project.pk)

        assert stats == {
            'total_tasks': 4,
            'completed_tasks': 1,
            'completion_rate': 25,
            'overdue_tasks': 1,
        }

    def test_empty_project(self, service, project):
        assert service.get_project_stats(project.pk) == {
            'total_tasks': 0,
            'completed_tasks': 0,
            'completion_rate': 0,
            'overdue_tasks': 0,
        }

    def test_missing_project_raises(self, service):
        with pytest.raises(ResourceNotFoundError) as exc:
            service.get_project_stats('3f1c1f6e-0000-4000-8000-000000000000')
        assert exc.value.status_code == 404

    def test_project_in_other_tenant_raises(self, project, other_tenant):
        with pytest.raises(ResourceNotFoundError):
            ProjectService(ProjectStore(tenant=other_tenant)).get_project_stats(project.pk)

    def test_ignores_tasks_of_other_projects(self, service, project, project_factory, task_factory, tenant):
        other = project_factory(tenant=tenant)
        task_factory(project=other, status='DONE')
        task_factory(project=project, status='TODO')

        stats = service.get_project_stats(project.pk)

        assert stats['total_tasks'] == 1
        assert stats['completed_tasks'] == 0
