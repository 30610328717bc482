"""Restaurant data access: Supabase first, JSON file when the database is not configured."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Restaurant
from ..models.errors import RepositoryError
from .records import parse_restaurants, read_json_rows


class RestaurantRepository(Protocol):
    def list_restaurants(self, *, dispatchable_only: bool = True) -> Sequence[Restaurant]:
        ...


def _filter(restaurants: Iterable[Restaurant], dispatchable_only: bool) -> tuple[Restaurant, ...]:
    if dispatchable_only:
        return tuple(restaurant for restaurant in restaurants if restaurant.is_dispatchable)
    return tuple(restaurants)


class InMemoryRestaurantRepository:
    def __init__(self, restaurants: Iterable[Restaurant] = ()) -> None:
        self._restaurants = list(restaurants)

    def list_restaurants(self, *, dispatchable_only: bool = True) -> Sequence[Restaurant]:
        return _filter(self._restaurants, dispatchable_only)


class FileRestaurantRepository:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings.restaurants_file

    def list_restaurants(self, *, dispatchable_only: bool = True) -> Sequence[Restaurant]:
        rows = read_json_rows(self.path, "restaurants")
        return _filter(parse_restaurants(rows), dispatchable_only)


class SupabaseRestaurantRepository:
    def __init__(self, client: Any, table: str | None = None, order_by: str | None = None) -> None:
        self.client = client
        self.table = table or settings.restaurants_table
        self.order_by = order_by or settings.restaurants_order_by

    def list_restaurants(self, *, dispatchable_only: bool = True) -> Sequence[Restaurant]:
        try:
            query = self.client.table(self.table).select("*")
            if dispatchable_only:
                query = query.eq("is_active", True).eq("is_accepting_orders", True)
            response = query.order(self.order_by).execute()
        except Exception as exc:
            logging.error(f"Failed to retrieve restaurants from database: {exc}")
            raise RepositoryError(f"Failed to retrieve restaurants from database: {exc}") from exc

        rows = response.data or []
        logging.info(f"Retrieved {len(rows)} restaurants from database")
        # Location may still be missing on rows that passed the flag filters.
        return _filter(parse_restaurants(rows), dispatchable_only)


def get_restaurant_repository() -> RestaurantRepository:
    supabase = get_supabase_client()
    if supabase:
        return SupabaseRestaurantRepository(supabase)
    return FileRestaurantRepository()
