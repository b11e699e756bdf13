"""
Projects Models - Tenant-level projects and their tasks.

This module defines:
- Project: A budgeted piece of work with a timeline
- Task: A unit of work, usually belonging to a project

Architecture: Tenant-aware models using TenantAwareModel base class.
Derived values (completion rate, remaining budget, overdue flags) are never
stored; ProjectService computes them on every read.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TenantAwareModel, TimestampedModel


# ============================================================================
# PROJECTS
# ============================================================================

class Project(TenantAwareModel, TimestampedModel):
    """
    A project owned by a tenant.

    Owns its tasks: deleting a project deletes them, but ProjectService
    refuses the delete while any task is still open.
    """

    class Status(models.TextChoices):
        PLANNING = 'PLANNING', _('Planning')
        ACTIVE = 'ACTIVE', _('Active')
        ON_HOLD = 'ON_HOLD', _('On Hold')
        COMPLETED = 'COMPLETED', _('Completed')
        CANCELLED = 'CANCELLED', _('Cancelled')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic info
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PLANNING
    )

    # Budget
    budget = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_('Approved budget; empty when not budgeted')
    )
    actual_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text=_('Cost incurred so far')
    )

    # Timeline
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    # Audit
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    class Meta:
        verbose_name = _('Project')
        verbose_name_plural = _('Projects')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['tenant', 'status'], name='projects_pr_tenant__2b8c1e_idx'),
            models.Index(fields=['tenant', '-created_at'], name='projects_pr_tenant__7d4f0a_idx'),
        ]

    def __str__(self):
        return self.name


# ============================================================================
# TASKS
# ============================================================================

class Task(TenantAwareModel, TimestampedModel):
    """
    A unit of work.

    Workflow: TODO -> IN_PROGRESS -> IN_REVIEW -> DONE, with BLOCKED
    reachable from any open state.
    """

    class Priority(models.TextChoices):
        LOW = 'LOW', _('Low')
        MEDIUM = 'MEDIUM', _('Medium')
        HIGH = 'HIGH', _('High')
        CRITICAL = 'CRITICAL', _('Critical')

    class Status(models.TextChoices):
        TODO = 'TODO', _('To Do')
        IN_PROGRESS = 'IN_PROGRESS', _('In Progress')
        IN_REVIEW = 'IN_REVIEW', _('In Review')
        DONE = 'DONE', _('Done')
        BLOCKED = 'BLOCKED', _('Blocked')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    priority = models.CharField(
        max_length=20,
        choices=Priority.choices,
        default=Priority.MEDIUM
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.TODO
    )

    # Effort
    estimated_hours = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True
    )
    actual_hours = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal('0.00')
    )

    due_date = models.DateField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    assigned_to = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text=_('Identifier (username) of the person doing the work')
    )

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='tasks'
    )

    class Meta:
        verbose_name = _('Task')
        verbose_name_plural = _('Tasks')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['tenant', 'status'], name='projects_ta_tenant__5e9a3c_idx'),
            models.Index(fields=['project', 'status'], name='projects_ta_project_8c2d71_idx'),
            models.Index(fields=['tenant', 'assigned_to'], name='projects_ta_tenant__a41f6b_idx'),
        ]

    def __str__(self):
        return self.title
