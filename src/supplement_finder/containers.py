"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from supplement_finder.adapters.file_storage import JsonFileStorage
from supplement_finder.adapters.http_client import HttpxHttpClient
from supplement_finder.adapters.open_food_facts_client import (
    OpenFoodFactsSupplementsApi,
    SupplementsApi,
)
from supplement_finder.adapters.supabase_storage import SupabaseStorage
from supplement_finder.config import Settings, parse_storage_backend
from supplement_finder.services.collections import (
    PersistentCollection,
    favorites_collection,
    recent_searches_collection,
)
from supplement_finder.services.detail import DetailCoordinator
from supplement_finder.services.search import SearchCoordinator
from supplement_finder.services.storage import InMemoryStorage, KeyValueStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    supplements_api: SupplementsApi
    storage: KeyValueStorage
    search_coordinator: SearchCoordinator
    detail_coordinator: DetailCoordinator
    favorites: PersistentCollection
    recent_searches: PersistentCollection
    close_resources: Callable[[], Awaitable[None]]


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the storage backend selected in settings."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "memory":
        return InMemoryStorage()
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires supabase_url and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStorage(client=client, table=settings.supabase_storage_table)
    return JsonFileStorage.create(settings.storage_dir)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = build_storage(resolved_settings)
    http_client = HttpxHttpClient.create(
        timeout_seconds=resolved_settings.http_timeout_seconds,
        user_agent=resolved_settings.http_user_agent,
    )
    supplements_api = OpenFoodFactsSupplementsApi(
        http_client=http_client,
        base_url=resolved_settings.off_base_url,
    )
    search_coordinator = SearchCoordinator(
        api=supplements_api,
        page_size=resolved_settings.search_page_size,
        discard_stale=resolved_settings.discard_stale_responses,
        debug=resolved_settings.debug,
    )
    detail_coordinator = DetailCoordinator(
        api=supplements_api,
        discard_stale=resolved_settings.discard_stale_responses,
        debug=resolved_settings.debug,
    )
    favorites = favorites_collection(
        storage, key=resolved_settings.favorites_storage_key
    )
    recent_searches = recent_searches_collection(
        storage,
        key=resolved_settings.recent_searches_storage_key,
        limit=resolved_settings.recent_searches_limit,
    )

    async def close_resources() -> None:
        await http_client.close()

    return AppContainer(
        settings=resolved_settings,
        supplements_api=supplements_api,
        storage=storage,
        search_coordinator=search_coordinator,
        detail_coordinator=detail_coordinator,
        favorites=favorites,
        recent_searches=recent_searches,
        close_resources=close_resources,
    )
