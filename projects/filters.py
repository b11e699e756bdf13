"""
Projects Filters - Django Filter classes for REST API filtering

This module provides filtering for:
- Projects (status, budget, dates)
- Tasks (status, priority, project, assignee, due dates)
"""

import django_filters
from django.db.models import F
from django.utils import timezone

from .models import Project, Task


# ==================== PROJECT FILTERS ====================

class ProjectFilter(django_filters.FilterSet):
    """
    Filter for projects.

    Supports:
    - Status filtering
    - Name search
    - Budget range and over-budget projects
    - Start/end date ranges
    """
    status = django_filters.MultipleChoiceFilter(choices=Project.Status.choices)
    name = django_filters.CharFilter(lookup_expr='icontains')

    budget_min = django_filters.NumberFilter(field_name='budget', lookup_expr='gte')
    budget_max = django_filters.NumberFilter(field_name='budget', lookup_expr='lte')
    has_budget = django_filters.BooleanFilter(field_name='budget', lookup_expr='isnull', exclude=True)
    over_budget = django_filters.BooleanFilter(method='filter_over_budget')

    start_after = django_filters.DateFilter(field_name='start_date', lookup_expr='gte')
    end_before = django_filters.DateFilter(field_name='end_date', lookup_expr='lte')

    class Meta:
        model = Project
        fields = ['status', 'name', 'has_budget', 'over_budget']

    def filter_over_budget(self, queryset, name, value):
        over = queryset.filter(budget__isnull=False, actual_cost__gt=F('budget'))
        if value:
            return over
        return queryset.exclude(pk__in=over.values('pk'))


# ==================== TASK FILTERS ====================

class TaskFilter(django_filters.FilterSet):
    """
    Filter for tasks.

    `overdue=true` uses the same rule as the derived `is_overdue` field:
    open tasks due before today.
    """
    status = django_filters.MultipleChoiceFilter(choices=Task.Status.choices)
    priority = django_filters.MultipleChoiceFilter(choices=Task.Priority.choices)
    project = django_filters.UUIDFilter(field_name='project_id')
    no_project = django_filters.BooleanFilter(field_name='project', lookup_expr='isnull')
    assigned_to = django_filters.CharFilter(lookup_expr='iexact')
    unassigned = django_filters.BooleanFilter(method='filter_unassigned')

    due_before = django_filters.DateFilter(field_name='due_date', lookup_expr='lt')
    due_after = django_filters.DateFilter(field_name='due_date', lookup_expr='gte')
    overdue = django_filters.BooleanFilter(method='filter_overdue')

    class Meta:
        model = Task
        fields = ['status', 'priority', 'project', 'assigned_to']

    def filter_unassigned(self, queryset, name, value):
        if value:
            return queryset.filter(assigned_to='')
        return queryset.exclude(assigned_to='')

    def filter_overdue(self, queryset, name, value):
        overdue = queryset.exclude(status=Task.Status.DONE).filter(
            due_date__isnull=False,
            due_date__lt=timezone.localdate()
        )
        if value:
            return overdue
        return queryset.exclude(pk__in=overdue.values('pk'))
