"""
Wedding Invitations Backend — Debug Route Handlers
====================================================

What:  Operational probes for first-time deployments: create tables, count
       rows, list columns, show which database the app is talking to.
When:  Mounted only when ENABLE_DEBUG_ROUTES=true. They are unauthenticated,
       so they must stay off in production.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.dependencies import get_gateway
from app.exceptions import DatabaseError
from app.schemas.common import StandardResponse
from app.services.gateway import DataGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/debug", tags=["Debug"])


@router.post("/init-db", response_model=StandardResponse[Dict[str, Any]])
async def init_db(gateway: DataGateway = Depends(get_gateway)):
    """Create any missing tables. Existing tables and data are left alone."""
    try:
        await gateway.create_tables()
        await gateway.commit()
        tables = await gateway.table_info()
    except Exception as e:
        logger.error("init-db failed: %s", str(e), exc_info=True)
        raise DatabaseError(context={"original_error": type(e).__name__})

    logger.warning("Database tables initialized through debug endpoint")
    return StandardResponse(message="Database initialized", data={"tables": sorted(tables)})


@router.get("/db-health", response_model=StandardResponse[Dict[str, Any]])
async def db_health(gateway: DataGateway = Depends(get_gateway)):
    try:
        await gateway.ping()
        counts = await gateway.row_counts()
    except Exception as e:
        logger.error("db-health failed: %s", str(e), exc_info=True)
        raise DatabaseError(context={"original_error": type(e).__name__})
    return StandardResponse(message="Database reachable", data={"row_counts": counts})


@router.get("/table-info", response_model=StandardResponse[Dict[str, Any]])
async def table_info(gateway: DataGateway = Depends(get_gateway)):
    try:
        tables = await gateway.table_info()
    except Exception as e:
        logger.error("table-info failed: %s", str(e), exc_info=True)
        raise DatabaseError(context={"original_error": type(e).__name__})
    return StandardResponse(message="Table information retrieved", data={"tables": tables})


@router.get("/db-connection", response_model=StandardResponse[Dict[str, Any]])
async def db_connection(gateway: DataGateway = Depends(get_gateway)):
    """Connection target with the password masked."""
    try:
        info = await gateway.connection_info()
    except Exception as e:
        logger.error("db-connection failed: %s", str(e), exc_info=True)
        raise DatabaseError(context={"original_error": type(e).__name__})
    return StandardResponse(message="Connection details", data=info)
