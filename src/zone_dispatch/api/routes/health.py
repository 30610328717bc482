"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check which zone/restaurant store is in use and that it can be read."""
    from ...data.restaurants_repository import get_restaurant_repository
    from ...data.zones_repository import get_zone_repository
    from ...db.supabase import get_supabase_client

    backend = "supabase" if get_supabase_client() else "file"
    try:
        zones = get_zone_repository().list_zones(active_only=False)
        restaurants = get_restaurant_repository().list_restaurants(dispatchable_only=False)
    except Exception as exc:
        return {
            "backend": backend,
            "connected": False,
            "error": str(exc),
            "message": f"Data store error: {exc}",
        }

    return {
        "backend": backend,
        "connected": True,
        "zones_count": len(zones),
        "active_zones_count": sum(1 for zone in zones if zone.is_active),
        "restaurants_count": len(restaurants),
        "message": f"Found {len(zones)} zones and {len(restaurants)} restaurants.",
    }
