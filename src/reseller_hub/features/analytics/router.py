import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import Annotated

from tortoise.backends.base.client import BaseDBAsyncClient

from ...common.exceptions import InternalServerError
from ...common.schemas import ErrorResponse
from ...core.database import get_db_connection
from ..auth.schemas import Principal
from ..auth.security import get_current_reseller
from .schemas import AnalyticsResponse
# Service functions that contain the business logic
from . import service as analytics_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reseller",
    tags=["Analytics"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Store not found"},
        500: {"model": ErrorResponse},
    },
)

@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    reseller: Annotated[Principal, Depends(get_current_reseller)],
    conn: Annotated[BaseDBAsyncClient, Depends(get_db_connection)],
):
    try:
        return await analytics_service.generate_analytics_report(reseller.id, conn)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch analytics: {e}", exc_info=True)
        raise InternalServerError("Failed to fetch analytics")
