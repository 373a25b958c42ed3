from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.database import get_db
from app.repositories.battery_repository import SqlAlchemyBatteryStore
from inventory.service import InventoryService


async def get_inventory_service(db: AsyncSession = Depends(get_db)) -> InventoryService:
    return InventoryService(
        SqlAlchemyBatteryStore(db), strict_status=settings.strict_status_updates
    )
