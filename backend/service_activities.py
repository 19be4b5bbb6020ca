"""
Service / facade layer for activities.

This module implements the rules the mobile client relies on before any
storage interaction. It calls `ActivityRepo` for the collection itself.
All write paths should go through this service so ids and server
timestamps are assigned in exactly one place.

Key responsibilities:
- assign ids (reuse the client's, otherwise a fresh UUID4)
- keep ids unique (a re-sent id replaces the stored record)
- stamp `isSynced`, `createdAt` and `updatedAt`
- shallow-merge updates without letting the body change the id
- filter and sort listings
"""

import logging
import uuid
from typing import List, Optional

from errors import ActivityNotFoundError
from models import Activity, ActivityIn, utc_now_iso
from repo_activities import ActivityRepo

logger = logging.getLogger(__name__)


class ActivityService:
    """Business rules for the activity store.

    Example usage:
        repo = ActivityRepo()
        svc = ActivityService(repo)
        svc.create_activity(ActivityIn(description="Evening walk"))
    """

    def __init__(self, repo: ActivityRepo):
        self.repo = repo

    def list_activities(self, search: Optional[str] = None) -> List[Activity]:
        """Return all activities, optionally filtered, newest first.

        An empty `search` means no filter. Sorting is stable, so records
        with equal or missing timestamps keep their insertion order.
        """

        result = self.repo.all()
        if search:
            result = [a for a in result if a.matches(search)]

        return _sort_newest_first(result)

    def get_activity(self, activity_id: str) -> Activity:
        activity = self.repo.get(activity_id)
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        return activity

    def create_activity(self, payload: ActivityIn) -> Activity:
        """Store a new activity and return it.

        Never fails: no field is required or type-checked. If the client
        supplies an id that is already stored, the stored record is
        replaced in place.
        """

        fields = payload.to_fields()
        fields["id"] = fields.get("id") or str(uuid.uuid4())
        fields["isSynced"] = True
        fields["createdAt"] = utc_now_iso()
        activity = Activity.model_validate(fields)

        if self.repo.replace(activity):
            logger.info(f"Activity replaced: {activity.id}")
        else:
            self.repo.add(activity)
            logger.info(f"Activity created: {activity.id}")
        return activity

    def update_activity(self, activity_id: str, patch: ActivityIn) -> Activity:
        """Shallow-merge `patch` over the stored record.

        Raises `ActivityNotFoundError` and leaves the store untouched when
        the id is unknown.
        """

        existing = self.get_activity(activity_id)
        merged = {
            **existing.to_fields(),
            **patch.to_fields(),
            "id": existing.id,
            "updatedAt": utc_now_iso(),
        }
        activity = Activity.model_validate(merged)
        self.repo.replace(activity)
        return activity

    def delete_activity(self, activity_id: str) -> None:
        if not self.repo.remove(activity_id):
            raise ActivityNotFoundError(activity_id)
        logger.info(f"Activity deleted: {activity_id}")


def _sort_newest_first(activities: List[Activity]) -> List[Activity]:
    # Undated records go last; sort() is stable, so ties keep insertion order.
    dated = [a for a in activities if a.sort_ts is not None]
    undated = [a for a in activities if a.sort_ts is None]
    dated.sort(key=lambda a: a.sort_ts, reverse=True)
    return dated + undated
