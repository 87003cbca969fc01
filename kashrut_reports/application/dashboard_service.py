"""Aggregate counts for the dashboard."""
from datetime import datetime, timezone

from kashrut_reports.models_db import InspectionStatus
from kashrut_reports.schemas import inspection_to_dict

RECENT_INSPECTIONS = 5


def start_of_month(now: datetime = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class DashboardService:
    def __init__(self, uow):
        self._uow = uow

    def get_stats(self, now: datetime = None) -> dict:
        """Computed at query time over every stored inspection."""
        repo = self._uow.inspections
        return {
            "totalInspections": repo.count(),
            "thisMonth": repo.count(created_since=start_of_month(now)),
            "pending": repo.count(status=InspectionStatus.PENDING.value),
            "completed": repo.count(status=InspectionStatus.COMPLETED.value),
        }

    def get_dashboard(self, now: datetime = None) -> dict:
        recent = self._uow.inspections.get_all(limit=RECENT_INSPECTIONS)
        return {
            "stats": self.get_stats(now),
            "recentInspections": [inspection_to_dict(i) for i in recent],
        }
