"""Service-level lookup failures, translated to 404s by the routes."""
from __future__ import annotations


class UserNotFoundError(LookupError):
    def __init__(self, user_id) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class LearningGoalNotFoundError(LookupError):
    def __init__(self, goal_id) -> None:
        super().__init__(f"Learning goal {goal_id} not found")
        self.goal_id = goal_id
