"""
Projects Admin - Django admin configuration.

Provides admin interface for:
- Projects (with their tasks inline)
- Tasks
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html

from . import derivations
from .models import Project, Task


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ['title', 'status', 'priority', 'assigned_to', 'due_date']
    show_change_link = True


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin for projects."""

    list_display = [
        'name',
        'tenant',
        'status',
        'budget_display',
        'start_date',
        'end_date',
        'created_at'
    ]
    list_filter = ['status', 'tenant']
    search_fields = ['name', 'description']
    readonly_fields = ['id', 'created_by', 'updated_by', 'created_at', 'updated_at']
    raw_id_fields = ['tenant']
    date_hierarchy = 'created_at'
    inlines = [TaskInline]

    fieldsets = (
        (_('Basic Info'), {
            'fields': ('id', 'tenant', 'name', 'description', 'status')
        }),
        (_('Timeline'), {
            'fields': ('start_date', 'end_date')
        }),
        (_('Budget'), {
            'fields': ('budget', 'actual_cost')
        }),
        (_('Audit'), {
            'fields': ('created_by', 'updated_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def budget_display(self, obj):
        """Actual cost against budget, red when over."""
        if obj.budget is None:
            return '-'
        color = 'red' if derivations.cost_exceeds_budget(obj.budget, obj.actual_cost) else 'inherit'
        return format_html(
            '<span style="color: {};">{} / {}</span>',
            color, obj.actual_cost, obj.budget
        )
    budget_display.short_description = _('Cost / Budget')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for tasks."""

    list_display = ['title', 'project', 'status', 'priority', 'assigned_to', 'due_date', 'completed_at']
    list_filter = ['status', 'priority', 'tenant']
    search_fields = ['title', 'description', 'assigned_to']
    readonly_fields = ['id', 'completed_at', 'created_at', 'updated_at']
    raw_id_fields = ['tenant', 'project']
