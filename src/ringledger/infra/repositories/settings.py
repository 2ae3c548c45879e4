"""SQLModel repository for goal settings, category goals and trackers."""

from __future__ import annotations

from typing import Any, Callable, ContextManager, Mapping, Optional

from sqlmodel import Session, select

from ...models.goal import CategoryGoal, Tracker
from ...models.settings import GoalSettings
from ...models.timestamps import utcnow


class SQLModelPreferencesRepository:
    """SQLModel-based preferences repository."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        self.session_factory = session_factory

    def get_settings(self, *, owner_key: str) -> Optional[GoalSettings]:
        with self.session_factory() as session:
            settings = session.get(GoalSettings, owner_key)
            if settings:
                session.expunge(settings)
            return settings

    def save_settings(self, settings: GoalSettings) -> GoalSettings:
        with self.session_factory() as session:
            settings.updated_at = utcnow()
            settings = session.merge(settings)
            session.commit()
            session.refresh(settings)
            session.expunge(settings)
            return settings

    def list_category_goals(self, *, owner_key: str) -> list[CategoryGoal]:
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(CategoryGoal)
                    .where(CategoryGoal.owner_key == owner_key)
                    .order_by(CategoryGoal.id)  # type: ignore[arg-type]
                ).all()
            )
            session.expunge_all()
            return rows

    def upsert_category_goal(self, category: str, target: int, *, owner_key: str) -> CategoryGoal:
        with self.session_factory() as session:
            goal = session.exec(
                select(CategoryGoal)
                .where(CategoryGoal.owner_key == owner_key)
                .where(CategoryGoal.category == category)
            ).first()
            if goal:
                goal.target = target
            else:
                goal = CategoryGoal(owner_key=owner_key, category=category, target=target)
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def list_trackers(self, *, owner_key: str) -> list[Tracker]:
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(Tracker)
                    .where(Tracker.owner_key == owner_key)
                    .order_by(Tracker.position, Tracker.id)  # type: ignore[arg-type]
                ).all()
            )
            session.expunge_all()
            return rows

    def create_tracker(self, tracker: Tracker, *, owner_key: str) -> Tracker:
        with self.session_factory() as session:
            tracker.owner_key = owner_key
            session.add(tracker)
            session.commit()
            session.refresh(tracker)
            session.expunge(tracker)
            return tracker

    def update_tracker(
        self, tracker_id: int, changes: Mapping[str, Any], *, owner_key: str
    ) -> Optional[Tracker]:
        with self.session_factory() as session:
            tracker = session.exec(
                select(Tracker).where(Tracker.id == tracker_id).where(Tracker.owner_key == owner_key)
            ).first()
            if tracker is None:
                return None
            for field, value in changes.items():
                setattr(tracker, field, value)
            session.add(tracker)
            session.commit()
            session.refresh(tracker)
            session.expunge(tracker)
            return tracker

    def delete_tracker(self, tracker_id: int, *, owner_key: str) -> bool:
        with self.session_factory() as session:
            tracker = session.exec(
                select(Tracker).where(Tracker.id == tracker_id).where(Tracker.owner_key == owner_key)
            ).first()
            if tracker is None:
                return False
            session.delete(tracker)
            session.commit()
            return True


__all__ = ["SQLModelPreferencesRepository"]
