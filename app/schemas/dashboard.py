"""Dashboard schemas."""

from app.schemas.base import CamelModel


class DashboardStats(CamelModel):
    """Per-user counts shown on the dashboard."""

    total_physicians: int
    upcoming_appointments: int
    pending_reminders: int
    monthly_appointments: int
