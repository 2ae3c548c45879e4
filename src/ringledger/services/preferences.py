"""Per-owner goal preferences.

A ``Preferences`` record is loaded once per request from the repository and
every mutation is written straight back; nothing is held between requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..domain.repositories.settings import PreferencesRepository
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger, mask_key
from ..models.goal import DEFAULT_TRACKER_COLOR, MAX_TRACKERS, CategoryGoal, Tracker
from ..models.settings import GoalSettings
from .identity import OwnerContext
from .ledger_service import parse_amount

logger = get_logger("preferences")

GOAL_FIELDS = {
    "targetBalance": "target_balance",
    "monthlySaveTarget": "monthly_save_target",
    "debtTotal": "debt_total",
}
TRACKER_TITLE_MAX = 64


@dataclass
class Preferences:
    """Everything an owner has configured for goal rings."""

    settings: GoalSettings
    category_goals: list[CategoryGoal] = field(default_factory=list)
    trackers: list[Tracker] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "targetBalance": self.settings.target_balance,
            "monthlySaveTarget": self.settings.monthly_save_target,
            "debtTotal": self.settings.debt_total,
            "categoryGoals": [
                {"category": goal.category, "target": goal.target} for goal in self.category_goals
            ],
            "trackers": [tracker_to_dict(tracker) for tracker in self.trackers],
        }


def tracker_to_dict(tracker: Tracker) -> dict[str, Any]:
    return {
        "id": tracker.id,
        "title": tracker.title,
        "current": tracker.current,
        "target": tracker.target,
        "color": tracker.color,
        "position": tracker.position,
    }


def _non_negative_int(value: Any, name: str) -> int:
    parsed = parse_amount(value)
    if parsed is None or parsed < 0:
        raise ValidationError(f"{name} must be a non-negative number")
    return int(parsed)


def load_preferences(repo: PreferencesRepository, owner: OwnerContext) -> Preferences:
    """Load the owner's preferences, falling back to defaults for settings."""

    settings = repo.get_settings(owner_key=owner.owner_key) or GoalSettings(
        owner_key=owner.owner_key
    )
    return Preferences(
        settings=settings,
        category_goals=repo.list_category_goals(owner_key=owner.owner_key),
        trackers=repo.list_trackers(owner_key=owner.owner_key),
    )


def update_goal_targets(
    repo: PreferencesRepository, prefs: Preferences, payload: Mapping[str, Any]
) -> Preferences:
    """Apply any of ``targetBalance``/``monthlySaveTarget``/``debtTotal``."""

    changes = {
        attr: _non_negative_int(payload[key], key)
        for key, attr in GOAL_FIELDS.items()
        if key in payload
    }
    if not changes:
        raise ValidationError("no goal fields supplied")
    for attr, value in changes.items():
        setattr(prefs.settings, attr, value)
    prefs.settings = repo.save_settings(prefs.settings)
    logger.info("Goal targets saved", extra={"owner": mask_key(prefs.settings.owner_key)})
    return prefs


def upsert_category_goal(
    repo: PreferencesRepository, prefs: Preferences, owner: OwnerContext, payload: Mapping[str, Any]
) -> CategoryGoal:
    category = str(payload.get("category") or "").strip()
    if not category:
        raise ValidationError("category is required")
    target = _non_negative_int(payload.get("target"), "target")
    goal = repo.upsert_category_goal(category, target, owner_key=owner.owner_key)
    prefs.category_goals = [g for g in prefs.category_goals if g.category != category] + [goal]
    return goal


def _next_free_position(trackers: list[Tracker]) -> int:
    used = {tracker.position for tracker in trackers}
    position = 0
    while position in used:
        position += 1
    return position


def _tracker_changes(payload: Mapping[str, Any]) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    if "title" in payload:
        title = str(payload.get("title") or "").strip()[:TRACKER_TITLE_MAX]
        if not title:
            raise ValidationError("title is required")
        changes["title"] = title
    for key in ("current", "target"):
        if key in payload:
            changes[key] = _non_negative_int(payload[key], key)
    if "color" in payload:
        changes["color"] = str(payload.get("color") or DEFAULT_TRACKER_COLOR).strip()[:16]
    if "position" in payload:
        try:
            changes["position"] = int(payload["position"])
        except (TypeError, ValueError):
            raise ValidationError("position must be a whole number") from None
    return changes


def add_tracker(
    repo: PreferencesRepository, prefs: Preferences, owner: OwnerContext, payload: Mapping[str, Any]
) -> Tracker:
    """Create a tracker; at most ``MAX_TRACKERS`` per owner."""

    if len(prefs.trackers) >= MAX_TRACKERS:
        raise ValidationError(f"at most {MAX_TRACKERS} trackers are allowed")
    fields = _tracker_changes(payload)
    fields.setdefault("title", f"Tracker {len(prefs.trackers) + 1}")
    fields.setdefault("position", _next_free_position(prefs.trackers))
    tracker = repo.create_tracker(Tracker(owner_key=owner.owner_key, **fields), owner_key=owner.owner_key)
    prefs.trackers.append(tracker)
    return tracker


def update_tracker(
    repo: PreferencesRepository,
    prefs: Preferences,
    owner: OwnerContext,
    tracker_id: int,
    payload: Mapping[str, Any],
) -> Tracker:
    tracker = repo.update_tracker(tracker_id, _tracker_changes(payload), owner_key=owner.owner_key)
    if tracker is None:
        raise NotFoundError()
    prefs.trackers = [t if t.id != tracker_id else tracker for t in prefs.trackers]
    return tracker


def remove_tracker(
    repo: PreferencesRepository, prefs: Preferences, owner: OwnerContext, tracker_id: int
) -> None:
    if not repo.delete_tracker(tracker_id, owner_key=owner.owner_key):
        raise NotFoundError()
    prefs.trackers = [t for t in prefs.trackers if t.id != tracker_id]


__all__ = [
    "Preferences",
    "add_tracker",
    "load_preferences",
    "remove_tracker",
    "tracker_to_dict",
    "update_goal_targets",
    "update_tracker",
    "upsert_category_goal",
]
