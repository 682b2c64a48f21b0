"""
Admin API endpoints for the family wishlist.

Provides:
- CSV text import of items
- Item listing and editing
- Person create / update / delete (delete also removes their items)
"""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from typing import Any, Optional, Union
import logging

from api.routes.wishlist import get_wishlist_service
from api.services.errors import InvalidRequestError
from api.services.normalizer import family_or_default
from api.services.wishlist import WishlistService
from api.services.wishlist_models import DEFAULT_FAMILY

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


class CsvUploadRequest(BaseModel):
    """CSV text pasted into the admin page."""
    csv: Any = None
    family: Optional[str] = None


class ItemUpdateRequest(BaseModel):
    """Partial item update. Unset fields are left alone."""
    recipientCode: Optional[str] = None
    recipientName: Optional[str] = None
    itemName: Optional[str] = None
    details: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    tags: Union[list[str], str, None] = None
    tag: Optional[str] = None
    claimedByCode: Optional[str] = None
    family: Optional[str] = None


class PersonCreateRequest(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    preferences: Optional[str] = None
    family: Optional[str] = None


class PersonUpdateRequest(BaseModel):
    name: Optional[str] = None
    preferences: Optional[str] = None
    family: Optional[str] = None


@router.post("/upload-csv-text")
def upload_csv_text(request: CsvUploadRequest, service: WishlistService = Depends(get_wishlist_service)):
    """
    Import items from CSV text.

    The first row is the header. Rows are appended as new items in the
    row's family, the request's family, or the default family.
    """
    if not request.csv or not isinstance(request.csv, str):
        raise InvalidRequestError("Missing csv text in request body (field `csv`).")

    added = service.import_csv(request.csv, request.family)
    if not added:
        return {"success": True, "added": 0, "message": "No rows to add."}
    return {"success": True, "added": len(added)}


@router.get("/items")
def list_items(
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    family = family_or_default(family)
    items = service.list_items(family)
    return {"family": family, "items": [i.to_dict() for i in items]}


@router.put("/item/{item_id}")
def update_item(
    item_id: str,
    request: ItemUpdateRequest,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Edit an item by numeric id within a family."""
    updates = request.model_dump(exclude_unset=True)
    item = service.update_item(item_id, family_or_default(family), updates)
    return {"success": True, "item": item.to_dict()}


@router.post("/person")
def create_person(request: PersonCreateRequest, service: WishlistService = Depends(get_wishlist_service)):
    person = service.create_person(
        code=request.code,
        name=request.name,
        preferences=request.preferences,
        family=request.family,
    )
    return {"success": True, "person": person.to_dict()}


@router.put("/person/{code}")
def update_person(
    code: str,
    request: PersonUpdateRequest,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    updates = request.model_dump(exclude_unset=True)
    person = service.update_person(code, family_or_default(family), updates)
    return {"success": True, "person": person.to_dict()}


@router.delete("/person/{code}")
def delete_person(
    code: str,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Delete a person and every item listed for them in the family."""
    removed = service.delete_person(code, family_or_default(family))
    return {"success": True, "removedItems": removed}
