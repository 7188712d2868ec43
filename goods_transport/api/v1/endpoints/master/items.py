from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.master.master_schema import ItemCreate, ItemResponse
from goods_transport.services.master.item_service import ItemService

router = APIRouter()

@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.MASTER_DATA_WRITE))
):
    """Add an item to the catalog"""
    return await ItemService(session).create_item(item_data)

@router.get("", response_model=List[ItemResponse])
async def get_items(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get the item catalog"""
    return await ItemService(session).get_items()
