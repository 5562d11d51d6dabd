"""Tests for dashboard statistics."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from app.services.dashboard_service import DashboardService
from app.storage.memory import MemoryStorage
from tests.conftest import create_appointment, create_physician


@pytest.mark.asyncio
async def test_empty_dashboard(client_a: AsyncClient) -> None:
    response = await client_a.get("/api/dashboard/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalPhysicians": 0,
        "upcomingAppointments": 0,
        "pendingReminders": 0,
        "monthlyAppointments": 0,
    }


@pytest.mark.asyncio
async def test_stats_match_lists(
    client_a: AsyncClient,
    client_b: AsyncClient,
    physician_data: dict,
) -> None:
    """Counts agree with what the list endpoints return, and ignore other users."""
    physician = await create_physician(client_a, physician_data)
    await create_physician(client_a, {**physician_data, "lastName": "Chen"})
    appointment = await create_appointment(client_a, physician["id"])
    await client_a.post(
        "/api/reminders",
        json={"appointmentId": appointment["id"], "reminderDate": "2030-01-01T08:00:00Z"},
    )
    await create_physician(client_b, physician_data)

    stats = (await client_a.get("/api/dashboard/stats")).json()
    physicians = (await client_a.get("/api/physicians")).json()
    upcoming = (await client_a.get("/api/appointments/upcoming")).json()

    assert stats["totalPhysicians"] == len(physicians) == 2
    assert stats["upcomingAppointments"] == len(upcoming) == 1
    assert stats["pendingReminders"] == 1


class TestDashboardService:
    """Stats computed against a fixed reference date."""

    TODAY = "2030-05-15"

    @pytest.fixture
    async def storage(self) -> MemoryStorage:
        storage = MemoryStorage()
        physician = await storage.create_physician(
            {"user_id": "u1", "first_name": "A", "last_name": "B", "specialty": "C", "phone": "1"}
        )

        def book(day: str, status: str = "scheduled") -> dict:
            return {
                "user_id": "u1",
                "physician_id": physician["id"],
                "date": day,
                "time": "10:00",
                "type": "visit",
                "status": status,
            }

        anchor = date.fromisoformat(self.TODAY)
        await storage.create_appointment(book((anchor - timedelta(days=10)).isoformat()))
        await storage.create_appointment(book(self.TODAY))
        await storage.create_appointment(book("2030-05-31", status="cancelled"))
        await storage.create_appointment(book("2030-06-01"))
        await storage.create_appointment(book("2029-05-20"))

        appointment = (await storage.list_appointments("u1"))[0]
        for sent in (False, False, True):
            await storage.create_reminder(
                {
                    "user_id": "u1",
                    "appointment_id": appointment["id"],
                    "reminder_date": "2030-05-14T09:00:00+00:00",
                    "sent": sent,
                }
            )
        return storage

    @pytest.mark.asyncio
    async def test_monthly_counts_current_month_only(self, storage: MemoryStorage) -> None:
        stats = await DashboardService(storage).get_stats("u1", today=self.TODAY)

        # 2030-05-05, 2030-05-15 and the cancelled 2030-05-31; not June or last year's May
        assert stats.monthly_appointments == 3
        # Today and 2030-06-01; the cancelled and past ones are excluded
        assert stats.upcoming_appointments == 2
        assert stats.pending_reminders == 2
        assert stats.total_physicians == 1

    @pytest.mark.asyncio
    async def test_other_user_sees_nothing(self, storage: MemoryStorage) -> None:
        stats = await DashboardService(storage).get_stats("u2", today=self.TODAY)
        assert stats.model_dump() == {
            "total_physicians": 0,
            "upcoming_appointments": 0,
            "pending_reminders": 0,
            "monthly_appointments": 0,
        }
