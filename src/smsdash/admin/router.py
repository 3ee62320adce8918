"""
Admin API router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from smsdash.shared.database import DatabaseManager, get_database_manager
from smsdash.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


class MigrateResponse(BaseModel):
    success: bool = True
    tables: list[str]


@router.post("/migrate", response_model=MigrateResponse)
async def migrate(
    db: Annotated[DatabaseManager, Depends(get_database_manager)],
) -> MigrateResponse:
    """Create any missing tables. Existing tables are left untouched."""
    tables = await db.create_all()
    logger.info("Schema migrated", extra={"tables": tables})
    return MigrateResponse(tables=tables)
