"""Demo dataset loaded in development."""

from datetime import date, timedelta

import structlog

from app.core.security import get_password_hash
from app.storage.base import Storage, today_iso

logger = structlog.get_logger()

DEMO_USER_ID = "demo-user-id"
DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password"  # pragma: allowlist secret

DEMO_PHYSICIANS = [
    {
        "first_name": "Sarah",
        "last_name": "Johnson",
        "specialty": "Cardiology",
        "phone": "(555) 123-4567",
        "email": "dr.johnson@healthcare.com",
        "address": "123 Medical Center Dr, Suite 200\nNew York, NY 10001",
        "office_hours": "Monday - Friday: 9:00 AM - 5:00 PM\nSaturday: 9:00 AM - 1:00 PM",
    },
    {
        "first_name": "Michael",
        "last_name": "Chen",
        "specialty": "Family Medicine",
        "phone": "(555) 234-5678",
        "email": "dr.chen@familycare.com",
        "address": "456 Health Plaza, Floor 3\nNew York, NY 10002",
        "office_hours": "Monday - Friday: 8:00 AM - 6:00 PM\nSaturday: 10:00 AM - 2:00 PM",
    },
    {
        "first_name": "Emily",
        "last_name": "Rodriguez",
        "specialty": "Dermatology",
        "phone": "(555) 345-6789",
        "email": "dr.rodriguez@skincare.com",
        "address": "789 Wellness Blvd, Suite 150\nNew York, NY 10003",
        "office_hours": "Tuesday - Saturday: 10:00 AM - 4:00 PM",
    },
]


async def seed_demo_data(storage: Storage, today: str | None = None) -> bool:
    """
    Load the demo user, three physicians and two upcoming appointments.

    Args:
        storage: Target store
        today: YYYY-MM-DD anchor for appointment dates

    Returns:
        False if the demo user or its username already existed and nothing was written
    """
    if await storage.get_user(DEMO_USER_ID):
        logger.info("demo_seed_skipped", reason="demo user exists")
        return False

    if await storage.get_user_by_username(DEMO_USERNAME):
        logger.warning("demo_seed_skipped", reason="username taken", username=DEMO_USERNAME)
        return False

    await storage.create_user(
        {
            "username": DEMO_USERNAME,
            "password": get_password_hash(DEMO_PASSWORD),
            "email": "john.doe@example.com",
            "first_name": "John",
            "last_name": "Doe",
        },
        user_id=DEMO_USER_ID,
    )

    created = [
        await storage.create_physician({"user_id": DEMO_USER_ID, **physician})
        for physician in DEMO_PHYSICIANS
    ]

    anchor = date.fromisoformat(today or today_iso())
    await storage.create_appointment(
        {
            "user_id": DEMO_USER_ID,
            "physician_id": created[0]["id"],
            "date": (anchor + timedelta(days=1)).isoformat(),
            "time": "10:00",
            "type": "checkup",
            "notes": "Annual cardiovascular checkup",
            "status": "scheduled",
        }
    )
    await storage.create_appointment(
        {
            "user_id": DEMO_USER_ID,
            "physician_id": created[1]["id"],
            "date": (anchor + timedelta(days=7)).isoformat(),
            "time": "14:30",
            "type": "consultation",
            "notes": "Follow-up on recent lab results",
            "status": "scheduled",
        }
    )

    logger.info("demo_seed_loaded", physicians=len(created), appointments=2)
    return True
