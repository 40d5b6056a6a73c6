import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import Annotated

from tortoise.backends.base.client import BaseDBAsyncClient

from ...common.exceptions import InternalServerError
from ...common.schemas import ErrorResponse
from ...core.database import get_db_connection
from ..auth.schemas import Principal
from ..auth.security import get_current_reseller
from .schemas import StorePublicSchema, StoreSettingsUpdateRequest
from . import service as store_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reseller/store",
    tags=["Store"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Store not found"},
        500: {"model": ErrorResponse},
    },
)

@router.get("", response_model=StorePublicSchema)
async def get_store(
    reseller: Annotated[Principal, Depends(get_current_reseller)],
    conn: Annotated[BaseDBAsyncClient, Depends(get_db_connection)],
):
    try:
        store = await store_service.get_store_for_reseller(reseller.id, conn)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch store: {e}", exc_info=True)
        raise InternalServerError("Failed to fetch store")
    return store_service._to_store_public_schema(store)

@router.patch(
    "/settings",
    response_model=StorePublicSchema,
    responses={400: {"model": ErrorResponse, "description": "Default markup out of bounds"}},
)
async def update_store_settings(
    payload: StoreSettingsUpdateRequest,
    reseller: Annotated[Principal, Depends(get_current_reseller)],
    conn: Annotated[BaseDBAsyncClient, Depends(get_db_connection)],
):
    try:
        store = await store_service.update_store_settings(
            reseller.id, payload.settings.to_settings(), conn
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update store settings: {e}", exc_info=True)
        raise InternalServerError("Failed to update store settings")
    return store_service._to_store_public_schema(store)
