"""
Service layer for cash cards.

``CardService`` authorises and executes every card operation on
behalf of a caller.  The caller's username is passed in as ``owner``
by the API layer and every store call is scoped by it, so a card
belonging to somebody else is never returned, changed or removed.
A card that exists but belongs to another owner is reported exactly
like a card that does not exist (``CardNotFoundError``).
"""

import logging
from typing import List, Optional, Tuple

from cashcard_api.app.core.config import settings
from cashcard_api.app.core.exceptions import CardNotFoundError
from cashcard_api.app.schemas.card import CardRead
from cashcard_api.app.services.card_store import (
    SORT_DIRECTIONS,
    SORTABLE_COLUMNS,
    CardStore,
    SQLiteCardStore,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT: Tuple[str, str] = ("amount", "asc")


def parse_sort(sort: Optional[str]) -> Tuple[str, str]:
    """Turn a ``field[,direction]`` query value into a (field, direction) pair.

    Field and direction are matched case-insensitively.  A missing
    direction means ascending.  An unknown field or direction yields
    the default order (amount ascending).
    """
    if not sort:
        return DEFAULT_SORT
    parts = [p.strip().lower() for p in sort.split(",")]
    field = parts[0]
    direction = parts[1] if len(parts) > 1 and parts[1] else "asc"
    if field not in SORTABLE_COLUMNS or direction not in SORT_DIRECTIONS:
        logger.debug("Ignoring unsupported sort %r", sort)
        return DEFAULT_SORT
    return field, direction


class CardService:
    """Owner-scoped CRUD operations on cash cards."""

    def __init__(self, store: Optional[CardStore] = None) -> None:
        self.store = store if store is not None else SQLiteCardStore()

    async def get_card(self, card_id: int, owner: str) -> CardRead:
        """Return the card ``card_id`` if ``owner`` owns it.

        The id and the owner are matched in one store query.
        """
        card = self.store.find_by_id_and_owner(card_id, owner)
        if card is None:
            logger.debug("Card %s not visible to %s", card_id, owner)
            raise CardNotFoundError(card_id)
        return card

    async def list_cards(
        self,
        owner: str,
        page: int = 0,
        size: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> List[CardRead]:
        """Return one page of the caller's cards.

        Defaults to the first page of ``settings.default_page_size``
        cards ordered by amount ascending.  A page past the last card
        is an empty list.
        """
        if size is None:
            size = settings.default_page_size
        field, direction = parse_sort(sort)
        return self.store.find_by_owner(owner, page, size, field, direction)

    async def create_card(self, amount: float, owner: str) -> CardRead:
        """Persist a new card owned by ``owner`` and return it with its id."""
        card = self.store.insert(amount, owner)
        logger.info("Created card %s for %s", card.id, owner)
        return card

    async def update_card(self, card_id: int, owner: str, amount: float) -> None:
        """Replace the amount of an owned card; id and owner never change."""
        if not self.store.update_amount(card_id, owner, amount):
            logger.debug("Update of card %s by %s matched nothing", card_id, owner)
            raise CardNotFoundError(card_id)
        logger.info("Updated card %s for %s", card_id, owner)

    async def delete_card(self, card_id: int, owner: str) -> None:
        """Delete an owned card.

        The scoped existence check runs first; a foreign or missing id
        raises ``CardNotFoundError`` and leaves the store untouched.
        """
        if not self.store.exists_by_id_and_owner(card_id, owner):
            logger.debug("Delete of card %s by %s matched nothing", card_id, owner)
            raise CardNotFoundError(card_id)
        self.store.delete_by_id_and_owner(card_id, owner)
        logger.info("Deleted card %s for %s", card_id, owner)
