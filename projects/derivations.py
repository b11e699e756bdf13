"""
Pure calculations behind the derived project and task fields.

Nothing here touches the database; ProjectService feeds these functions
values it has already loaded.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

DONE = 'DONE'


def completion_rate(completed: int, total: int) -> int:
    """
    Percentage of completed tasks, rounded half up. 0 when there are no tasks.

    >>> completion_rate(1, 8)
    13
    >>> completion_rate(0, 0)
    0
    """
    if total <= 0:
        return 0
    rate = (Decimal(100) * completed / total).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return int(rate)


def remaining_budget(budget: Optional[Decimal], actual_cost: Optional[Decimal]) -> Optional[Decimal]:
    """
    `budget - actual_cost`, or None when no budget is set.

    A budget of zero is a real budget, so the result may be negative.
    """
    if budget is None:
        return None
    return Decimal(budget) - Decimal(actual_cost or 0)


def cost_exceeds_budget(budget: Optional[Decimal], actual_cost: Optional[Decimal]) -> bool:
    return budget is not None and actual_cost is not None and actual_cost > budget


def is_overdue(status: str, due_date: Optional[date], today: date) -> bool:
    """
    Open tasks whose due date is strictly before `today`.

    Due today is not overdue.
    """
    if status == DONE or due_date is None:
        return False
    return due_date < today


def count_overdue(tasks: Iterable, today: date) -> int:
    """Count objects with `status` and `due_date` attributes that are overdue."""
    return sum(1 for task in tasks if is_overdue(task.status, task.due_date, today))


def count_completed(statuses: Iterable[str]) -> int:
    return sum(1 for status in statuses if status == DONE)
