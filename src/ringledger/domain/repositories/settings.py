"""Preferences repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.goal import CategoryGoal, Tracker
from ...models.settings import GoalSettings


class PreferencesRepository(Protocol):
    """Persistence for per-owner goal settings, category goals and trackers."""

    def get_settings(self, *, owner_key: str) -> Optional[GoalSettings]:
        ...

    def save_settings(self, settings: GoalSettings) -> GoalSettings:
        ...

    def list_category_goals(self, *, owner_key: str) -> list[CategoryGoal]:
        ...

    def upsert_category_goal(self, category: str, target: int, *, owner_key: str) -> CategoryGoal:
        ...

    def list_trackers(self, *, owner_key: str) -> list[Tracker]:
        ...

    def create_tracker(self, tracker: Tracker, *, owner_key: str) -> Tracker:
        ...

    def update_tracker(
        self, tracker_id: int, changes: Mapping[str, Any], *, owner_key: str
    ) -> Optional[Tracker]:
        ...

    def delete_tracker(self, tracker_id: int, *, owner_key: str) -> bool:
        ...
