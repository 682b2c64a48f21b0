"""
Wishlist API routes.

Endpoints used by family members: who can I shop for, what is on their
list, what have I claimed, and claim/unclaim.
"""
import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.services.data_store import DataStore, get_data_store
from api.services.normalizer import family_or_default
from api.services.wishlist import WishlistService
from api.services.wishlist_models import DEFAULT_FAMILY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["wishlist"])


def get_wishlist_service(store: DataStore = Depends(get_data_store)) -> WishlistService:
    return WishlistService(store)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class ClaimRequest(BaseModel):
    viewerCode: Optional[str] = None
    itemId: Union[int, str, None] = None
    family: Optional[str] = None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/recipients")
def get_recipients(
    code: Optional[str] = None,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    """List people in a family and resolve the current user by code."""
    return service.recipients(code, family_or_default(family))


@router.get("/families")
def get_families(service: WishlistService = Depends(get_wishlist_service)):
    """Distinct families seen across people and items."""
    return {"families": service.families()}


@router.get("/wishlist")
def get_wishlist(
    viewerCode: Optional[str] = None,
    recipientCode: Optional[str] = None,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    """A recipient's items, with claim status relative to the viewer."""
    family = family_or_default(family)
    return {
        "viewerCode": viewerCode,
        "recipientCode": recipientCode,
        "family": family,
        "items": service.wishlist(viewerCode, recipientCode, family),
    }


@router.get("/my-shopping-list")
def get_my_shopping_list(
    viewerCode: Optional[str] = None,
    family: str = Query(default=DEFAULT_FAMILY),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Items the viewer has claimed."""
    family = family_or_default(family)
    return {
        "viewerCode": viewerCode,
        "family": family,
        "items": service.shopping_list(viewerCode, family),
    }


@router.post("/claim")
def claim_item(request: ClaimRequest, service: WishlistService = Depends(get_wishlist_service)):
    return service.claim(request.viewerCode, request.itemId, family_or_default(request.family))


@router.post("/unclaim")
def unclaim_item(request: ClaimRequest, service: WishlistService = Depends(get_wishlist_service)):
    return service.unclaim(request.viewerCode, request.itemId, family_or_default(request.family))
