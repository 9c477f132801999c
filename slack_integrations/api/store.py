"""
Store diagnostics endpoints
"""
from fastapi import APIRouter, HTTPException
from slack_integrations.store import get_table, check_table_health
from slack_integrations.core.logging_config import get_logger

router = APIRouter(prefix="/store", tags=["store"])
logger = get_logger("slack_integrations.api.store")


@router.get("/health")
async def store_health():
    """Get store health status"""
    return await check_table_health()


@router.get("/info")
async def store_info():
    """Get store backend information"""
    try:
        table = get_table()
        return await table.get_info()
    except Exception as e:
        logger.error(f"Error getting store info: {e}")
        raise HTTPException(status_code=500, detail=str(e))
