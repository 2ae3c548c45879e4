"""Goal targets, category ring targets and tracker routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import preferences_repository
from ...services import preferences as prefs_service
from ..common import current_owner, json_body
from . import bp


@bp.get("")
def get_preferences():
    owner = current_owner()
    prefs = prefs_service.load_preferences(preferences_repository(), owner)
    return jsonify(prefs.to_dict())


@bp.put("")
def put_goal_targets():
    owner = current_owner()
    repo = preferences_repository()
    prefs = prefs_service.load_preferences(repo, owner)
    prefs_service.update_goal_targets(repo, prefs, json_body())
    return jsonify(prefs.to_dict())


@bp.put("/category-goals")
def put_category_goal():
    owner = current_owner()
    repo = preferences_repository()
    prefs = prefs_service.load_preferences(repo, owner)
    goal = prefs_service.upsert_category_goal(repo, prefs, owner, json_body())
    return jsonify({"category": goal.category, "target": goal.target})


@bp.post("/trackers")
def create_tracker():
    owner = current_owner()
    repo = preferences_repository()
    prefs = prefs_service.load_preferences(repo, owner)
    tracker = prefs_service.add_tracker(repo, prefs, owner, json_body())
    return jsonify(prefs_service.tracker_to_dict(tracker)), 201


@bp.patch("/trackers/<int:tracker_id>")
def update_tracker(tracker_id: int):
    owner = current_owner()
    repo = preferences_repository()
    prefs = prefs_service.load_preferences(repo, owner)
    tracker = prefs_service.update_tracker(repo, prefs, owner, tracker_id, json_body())
    return jsonify(prefs_service.tracker_to_dict(tracker))


@bp.delete("/trackers/<int:tracker_id>")
def delete_tracker(tracker_id: int):
    owner = current_owner()
    repo = preferences_repository()
    prefs = prefs_service.load_preferences(repo, owner)
    prefs_service.remove_tracker(repo, prefs, owner, tracker_id)
    return jsonify({"ok": True})
