"""Zone data access: Supabase first, JSON file when the database is not configured."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Zone
from ..models.errors import RepositoryError
from .records import parse_zones, read_json_rows


class ZoneRepository(Protocol):
    def list_zones(self, *, active_only: bool = True) -> Sequence[Zone]:
        ...


class InMemoryZoneRepository:
    """Zones held in a list; iteration order is insertion order."""

    def __init__(self, zones: Iterable[Zone] = ()) -> None:
        self._zones = list(zones)

    def list_zones(self, *, active_only: bool = True) -> Sequence[Zone]:
        if active_only:
            return tuple(zone for zone in self._zones if zone.is_active)
        return tuple(self._zones)


class FileZoneRepository:
    """Zones stored as a JSON list (or ``{"zones": [...]}``) on disk."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings.zones_file

    def list_zones(self, *, active_only: bool = True) -> Sequence[Zone]:
        zones = parse_zones(read_json_rows(self.path, "zones"))
        if active_only:
            return tuple(zone for zone in zones if zone.is_active)
        return zones


class SupabaseZoneRepository:
    def __init__(self, client: Any, table: str | None = None, order_by: str | None = None) -> None:
        self.client = client
        self.table = table or settings.zones_table
        self.order_by = order_by or settings.zones_order_by

    def list_zones(self, *, active_only: bool = True) -> Sequence[Zone]:
        try:
            query = self.client.table(self.table).select("*")
            if active_only:
                query = query.eq("is_active", True)
            response = query.order(self.order_by).execute()
        except Exception as exc:
            logging.error(f"Failed to retrieve zones from database: {exc}")
            raise RepositoryError(f"Failed to retrieve zones from database: {exc}") from exc

        rows = response.data or []
        logging.info(f"Retrieved {len(rows)} zones from database (active_only={active_only})")
        return parse_zones(rows)


def get_zone_repository() -> ZoneRepository:
    """Database-backed repository when Supabase is configured, otherwise the JSON file."""
    supabase = get_supabase_client()
    if supabase:
        return SupabaseZoneRepository(supabase)
    return FileZoneRepository()
