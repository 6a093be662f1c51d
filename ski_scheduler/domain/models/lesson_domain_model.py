# ski_scheduler/domain/models/lesson_domain_model.py

from enum import Enum

# Value of ``assigned_to`` for a lesson nobody has claimed
UNASSIGNED = "None"


class LessonState(str, Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


def lesson_state(assigned_to: str) -> LessonState:
    """A lesson is unassigned exactly when it holds the sentinel."""
    if assigned_to == UNASSIGNED:
        return LessonState.UNASSIGNED
    return LessonState.ASSIGNED
