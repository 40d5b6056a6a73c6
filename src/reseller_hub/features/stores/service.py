import logging
from typing import Any, Optional

from tortoise.backends.base.client import BaseDBAsyncClient

from ...common.exceptions import SettingsValidationError, StoreNotFoundError
from .models import Store, DEFAULT_STORE_SETTINGS, default_store_settings
from .schemas import StorePublicSchema

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _stored_bound(settings: dict[str, Any], key: str) -> float:
    value = settings.get(key)
    if not _is_number(value):
        return DEFAULT_STORE_SETTINGS[key]
    return value


def _format_percent(value: Any) -> str:
    return f"{value:g}%"


async def get_store_for_reseller(reseller_id: int, conn: BaseDBAsyncClient) -> Store:
    store = await Store.get_or_none(reseller_id=reseller_id, using_db=conn)
    if store is None:
        logger.info(f"No store found for reseller {reseller_id}")
        raise StoreNotFoundError()
    return store


def validate_default_markup(current_settings: dict[str, Any], new_settings: dict[str, Any]) -> None:
    """Checks a requested defaultMarkup against the persisted bounds.

    Bounds sent in the same payload are ignored; only what is already stored
    decides whether the new default is acceptable.
    """
    if "defaultMarkup" not in new_settings:
        return

    minimum = _stored_bound(current_settings, "minimumMarkup")
    maximum = _stored_bound(current_settings, "maximumMarkup")
    requested = new_settings["defaultMarkup"]
    if not _is_number(requested) or requested < minimum or requested > maximum:
        raise SettingsValidationError(
            f"Default markup must be between {_format_percent(minimum)} and {_format_percent(maximum)}"
        )


async def update_store_settings(
    reseller_id: int, settings: dict[str, Any], conn: BaseDBAsyncClient
) -> Store:
    """Shallow-merges a partial settings map into the reseller's store.

    Payload keys overwrite stored keys, keys not in the payload are kept. The
    merged map is persisted with a single save, after validation, so a
    rejected payload leaves the stored settings untouched.

    Args:
        reseller_id: Id of the authenticated reseller.
        settings: The partial map, keyed by wire names (e.g. ``defaultMarkup``).
        conn: Connection from the application's pool.

    Returns:
        The updated Store.

    Raises:
        StoreNotFoundError: The reseller has no store.
        SettingsValidationError: ``defaultMarkup`` is outside the stored bounds.
    """
    store = await get_store_for_reseller(reseller_id, conn)
    current_settings = dict(store.settings or {})

    validate_default_markup(current_settings, settings)

    store.settings = {**current_settings, **settings}
    await store.save(using_db=conn)
    logger.info(f"Updated settings {sorted(settings)} for store {store.public_id}")
    return store


async def provision_store(
    reseller_id: int, name: str, settings: Optional[dict[str, Any]] = None,
    conn: Optional[BaseDBAsyncClient] = None,
) -> Store:
    """Creates the reseller's store seeded with the default settings."""
    initial_settings = default_store_settings()
    if settings:
        initial_settings.update(settings)
    return await Store.create(
        reseller_id=reseller_id, name=name, settings=initial_settings, using_db=conn
    )


def _to_store_public_schema(store: Store) -> StorePublicSchema:
    return StorePublicSchema(
        public_id=store.public_id,
        name=store.name,
        settings=store.settings or {},
        created_at=store.created_at,
        updated_at=store.updated_at,
    )
