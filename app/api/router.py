"""API router configuration."""

from fastapi import APIRouter

from app.api.endpoints import appointments, auth, dashboard, health, physicians, reminders

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(physicians.router, prefix="/physicians", tags=["Physicians"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["Reminders"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
