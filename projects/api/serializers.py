"""
Projects Serializers - DRF serializers for API endpoints.

This module provides serializers for:
- Projects (CRUD, with derived task counts and remaining budget)
- Tasks (CRUD, with the derived overdue flag)
- Inputs and outputs of the workflow actions

Derived fields are attached to instances by ProjectService before
serialization and are always read-only.
"""

from rest_framework import serializers

from ..models import Project, Task


# ============================================================================
# PROJECT SERIALIZERS
# ============================================================================

class ProjectSerializer(serializers.ModelSerializer):
    """Serializer for projects."""

    created_by = serializers.CharField(source='created_by.username', read_only=True, default=None)
    updated_by = serializers.CharField(source='updated_by.username', read_only=True, default=None)

    # Derived
    total_tasks = serializers.IntegerField(read_only=True)
    completed_tasks = serializers.IntegerField(read_only=True)
    completion_rate = serializers.IntegerField(read_only=True)
    remaining_budget = serializers.DecimalField(
        max_digits=16,
        decimal_places=2,
        read_only=True,
        allow_null=True
    )

    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'description',
            'status',
            'budget',
            'actual_cost',
            'remaining_budget',
            'start_date',
            'end_date',
            'total_tasks',
            'completed_tasks',
            'completion_rate',
            'created_by',
            'updated_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


# ============================================================================
# TASK SERIALIZERS
# ============================================================================

class TaskSerializer(serializers.ModelSerializer):
    """
    Serializer for tasks.

    The project is referenced by `project_id`; existence within the tenant
    is checked by ProjectService, which answers 404 for unknown ids.
    """

    project_id = serializers.UUIDField(required=False, allow_null=True)

    # Derived
    is_overdue = serializers.BooleanField(read_only=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'title',
            'description',
            'priority',
            'status',
            'estimated_hours',
            'actual_hours',
            'due_date',
            'completed_at',
            'is_overdue',
            'assigned_to',
            'project_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'completed_at', 'created_at', 'updated_at']


# ============================================================================
# ACTION SERIALIZERS
# ============================================================================

class CompleteTaskInputSerializer(serializers.Serializer):
    task_id = serializers.CharField()


class AssignTaskInputSerializer(serializers.Serializer):
    task_id = serializers.CharField()
    # Blank assignees reach the service, which answers with a soft failure
    assigned_to = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        allow_null=True,
        trim_whitespace=False,
        default=''
    )


class UpdateBudgetInputSerializer(serializers.Serializer):
    project_id = serializers.CharField()
    new_budget = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )
    additional_cost = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )


class ProjectStatsQuerySerializer(serializers.Serializer):
    project_id = serializers.CharField()


class ActionResultSerializer(serializers.Serializer):
    """Result of complete/assign. Not-found and refused requests carry success=false."""
    success = serializers.BooleanField()
    message = serializers.CharField()


class BudgetResultSerializer(ActionResultSerializer):
    remaining_budget = serializers.DecimalField(
        max_digits=16, decimal_places=2, allow_null=True
    )
    warnings = serializers.ListField(child=serializers.CharField(), required=False)


class ProjectStatsSerializer(serializers.Serializer):
    total_tasks = serializers.IntegerField()
    completed_tasks = serializers.IntegerField()
    completion_rate = serializers.IntegerField()
    overdue_tasks = serializers.IntegerField()
