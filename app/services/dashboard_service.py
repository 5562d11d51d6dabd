"""Dashboard statistics."""

from app.schemas.dashboard import DashboardStats
from app.storage.base import Storage, today_iso


class DashboardService:
    """Read-side aggregation over a user's records; nothing is cached."""

    def __init__(self, storage: Storage):
        """Initialize service with storage."""
        self.storage = storage

    async def get_stats(self, user_id: str, today: str | None = None) -> DashboardStats:
        """
        Compute the dashboard counts for a user.

        Args:
            user_id: Owner
            today: YYYY-MM-DD reference date; defaults to the current UTC date

        Returns:
            Physician total, upcoming and this-month appointment counts, unsent reminders
        """
        today = today or today_iso()
        current_month = today[:7]

        physicians = await self.storage.list_physicians(user_id)
        upcoming = await self.storage.list_upcoming_appointments(user_id, today=today)
        reminders = await self.storage.list_reminders(user_id)
        appointments = await self.storage.list_appointments(user_id)

        return DashboardStats(
            total_physicians=len(physicians),
            upcoming_appointments=len(upcoming),
            pending_reminders=sum(1 for reminder in reminders if reminder["sent"] is False),
            monthly_appointments=sum(
                1 for appointment in appointments if appointment["date"][:7] == current_month
            ),
        )
