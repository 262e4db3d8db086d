"""ORM models exposed for metadata discovery."""
from smartstudy.db.models.fixed_schedule import FixedSchedule
from smartstudy.db.models.generated_schedule import GeneratedSchedule
from smartstudy.db.models.learning_goal import LearningGoal
from smartstudy.db.models.task import Task
from smartstudy.db.models.user import User

__all__ = [
    "FixedSchedule",
    "GeneratedSchedule",
    "LearningGoal",
    "Task",
    "User",
]
