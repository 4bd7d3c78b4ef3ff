"""
Cash card endpoints for API v1.

Every route requires HTTP Basic credentials of a user holding the
card owner role (``settings.card_owner_role``); other authenticated
users receive 403 before any card is looked up.  The authenticated
username is the owner of every card created, listed or changed here.
Cards owned by someone else answer 404, the same as missing ids.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from cashcard_api.app.core.config import settings
from cashcard_api.app.core.exceptions import CardNotFoundError
from cashcard_api.app.core.security import require_roles
from cashcard_api.app.schemas.card import CardCreate, CardRead, CardUpdate
from cashcard_api.app.services.card_service import CardService

router = APIRouter()

require_card_owner = require_roles(settings.card_owner_role)


def get_card_service() -> CardService:
    """Dependency returning the card service backed by the SQLite store."""
    return CardService()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")


@router.get("/{card_id}", response_model=CardRead)
async def get_card(
    card_id: int,
    current_user: dict = Depends(require_card_owner),
    service: CardService = Depends(get_card_service),
) -> CardRead:
    """Return a single card owned by the caller."""
    try:
        return await service.get_card(card_id, current_user["sub"])
    except CardNotFoundError:
        raise _not_found()


@router.get("", response_model=List[CardRead])
async def list_cards(
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1, le=settings.max_page_size),
    sort: Optional[str] = Query(None, description="``field`` or ``field,asc|desc``; field is id or amount"),
    current_user: dict = Depends(require_card_owner),
    service: CardService = Depends(get_card_service),
) -> List[CardRead]:
    """Return a page of the caller's cards.

    Defaults to page 0 with 20 cards sorted by amount ascending.  An
    unsupported sort value falls back to the default order.
    """
    return await service.list_cards(current_user["sub"], page=page, size=size, sort=sort)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_card(
    card_in: CardCreate,
    request: Request,
    current_user: dict = Depends(require_card_owner),
    service: CardService = Depends(get_card_service),
) -> Response:
    """Create a card for the caller.

    The response has no body; its ``Location`` header points at the
    new card under the same prefix the request used.
    """
    card = await service.create_card(card_in.amount, current_user["sub"])
    location = f"{request.url.path.rstrip('/')}/{card.id}"
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_card(
    card_id: int,
    card_in: CardUpdate,
    current_user: dict = Depends(require_card_owner),
    service: CardService = Depends(get_card_service),
) -> Response:
    """Replace the amount of a card owned by the caller."""
    try:
        await service.update_card(card_id, current_user["sub"], card_in.amount)
    except CardNotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    current_user: dict = Depends(require_card_owner),
    service: CardService = Depends(get_card_service),
) -> Response:
    """Delete a card owned by the caller."""
    try:
        await service.delete_card(card_id, current_user["sub"])
    except CardNotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
