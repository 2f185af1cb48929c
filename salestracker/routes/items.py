"""Item routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from salestracker.config import settings
from salestracker.dependencies import get_item_service
from salestracker.schemas.item import Item, ItemCreate, ItemResponse, ItemUpdate
from salestracker.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["Items"])


@router.get("/", response_model=List[ItemResponse])
async def list_items(
    search: Optional[str] = Query(None, description="Search by name, description or ID"),
    service: ItemService = Depends(get_item_service)
):
    """List all items, optionally filtered by a search term."""
    if search:
        items = await service.search_items(search)
    else:
        items = await service.get_all_items()
    return [ItemResponse.model_validate(item) for item in items]


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    service: ItemService = Depends(get_item_service)
):
    """Create a new item."""
    item_id = await service.create_item(Item(**item_data.model_dump()))
    return ItemResponse.model_validate(await service.get_item(item_id))


@router.get("/low-stock", response_model=List[ItemResponse])
async def list_low_stock_items(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, description="Available quantity below this is low"),
    service: ItemService = Depends(get_item_service)
):
    """List items running low on available stock."""
    items = await service.get_low_stock_items(threshold)
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/backordered", response_model=List[ItemResponse])
async def list_backordered_items(service: ItemService = Depends(get_item_service)):
    """List items with more allocated than on hand."""
    items = await service.get_backordered_items()
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    service: ItemService = Depends(get_item_service)
):
    """Get a specific item."""
    item = await service.get_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return ItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    item_update: ItemUpdate,
    service: ItemService = Depends(get_item_service)
):
    """Update an item's details."""
    item = await service.get_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )

    update_data = item_update.model_dump(exclude_unset=True)
    item = Item.model_validate({**item.model_dump(), **update_data})

    await service.update_item(item)
    return ItemResponse.model_validate(await service.get_item(item_id))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    service: ItemService = Depends(get_item_service)
):
    """Delete an item. Its orders are kept."""
    item = await service.get_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )

    await service.delete_item(item_id)
    return None


@router.post("/{item_id}/add-inventory", response_model=ItemResponse)
async def add_inventory(
    item_id: int,
    quantity: int = Query(..., description="Quantity to add"),
    service: ItemService = Depends(get_item_service)
):
    """Receive stock (increase current quantity)."""
    return ItemResponse.model_validate(await service.add_inventory(item_id, quantity))


@router.post("/{item_id}/remove-inventory", response_model=ItemResponse)
async def remove_inventory(
    item_id: int,
    quantity: int = Query(..., description="Quantity to remove"),
    service: ItemService = Depends(get_item_service)
):
    """Take stock out manually. Fails if more than on hand is requested."""
    return ItemResponse.model_validate(await service.remove_inventory(item_id, quantity))


@router.post("/{item_id}/set-inventory", response_model=ItemResponse)
async def set_inventory(
    item_id: int,
    quantity: int = Query(..., description="New current quantity"),
    service: ItemService = Depends(get_item_service)
):
    """Set the current quantity, e.g. after a stock count."""
    return ItemResponse.model_validate(await service.set_inventory(item_id, quantity))
