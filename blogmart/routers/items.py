import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from blogmart import dependencies as deps
from blogmart.errors import ItemNotFound
from blogmart.repos.items_store import ItemsStore
from blogmart.schemas.items import CreateItem, Item
from blogmart.security import get_api_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items")


@router.get("", response_model=List[Item])
def find_all(store: ItemsStore = Depends(deps.get_items_store)):
    return store.find_all()


@router.get("/{item_id}", response_model=Item)
def find_by_id(item_id: str, store: ItemsStore = Depends(deps.get_items_store)):
    try:
        return store.find_by_id(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail="Item not found")


@router.post(
    "", response_model=Item, status_code=201, dependencies=[Depends(get_api_key)]
)
def create(data: CreateItem, store: ItemsStore = Depends(deps.get_items_store)):
    return store.create(data)


@router.patch("/{item_id}", response_model=Item, dependencies=[Depends(get_api_key)])
def update_status(item_id: str, store: ItemsStore = Depends(deps.get_items_store)):
    """Mark an item as sold out."""
    try:
        return store.update_status(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail="Item not found")


@router.delete("/{item_id}", status_code=204, dependencies=[Depends(get_api_key)])
def delete(item_id: str, store: ItemsStore = Depends(deps.get_items_store)):
    store.delete(item_id)
    return Response(status_code=204)
