"""
Persistence for cash cards.

``CardStore`` describes the scoped queries the card service relies
on.  Every lookup or mutation that takes a card id also takes the
owner, so no implementation can be asked for another owner's card.
``SQLiteCardStore`` implements the protocol on top of the
``cash_cards`` table created by ``core.db.init_db``.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional, Protocol

from cashcard_api.app.core.db import get_connection
from cashcard_api.app.schemas.card import CardRead

# Columns a listing may be ordered by, mapped to the SQL identifier.
SORTABLE_COLUMNS = {"id": "id", "amount": "amount"}
SORT_DIRECTIONS = {"asc": "ASC", "desc": "DESC"}


class CardStore(Protocol):
    """Abstraction over card persistence."""

    def find_by_id_and_owner(self, card_id: int, owner: str) -> Optional[CardRead]:
        """Return the card only if ``card_id`` exists and belongs to ``owner``."""

        ...

    def find_by_owner(
        self,
        owner: str,
        page: int,
        size: int,
        sort_field: str,
        direction: str,
    ) -> List[CardRead]:
        """
        Return one page of ``owner``'s cards.

        ``sort_field`` must be a key of ``SORTABLE_COLUMNS`` and
        ``direction`` a key of ``SORT_DIRECTIONS``.  Ties are broken by
        ascending id so repeated calls return the same order.
        """

        ...

    def exists_by_id_and_owner(self, card_id: int, owner: str) -> bool:
        ...

    def insert(self, amount: float, owner: str) -> CardRead:
        """Persist a new card and return it with its assigned id."""

        ...

    def update_amount(self, card_id: int, owner: str, amount: float) -> bool:
        """Replace the amount of an owned card; ``False`` if nothing matched."""

        ...

    def delete_by_id_and_owner(self, card_id: int, owner: str) -> bool:
        ...


class SQLiteCardStore:
    """SQLite-backed implementation of ``CardStore``.

    A new connection is opened per call and closed before returning.
    """

    @staticmethod
    def _row_to_card(row: sqlite3.Row) -> CardRead:
        return CardRead(id=row["id"], amount=row["amount"], owner=row["owner"])

    def find_by_id_and_owner(self, card_id: int, owner: str) -> Optional[CardRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, amount, owner FROM cash_cards WHERE id = ? AND owner = ?",
                (card_id, owner),
            ).fetchone()
            return self._row_to_card(row) if row else None
        finally:
            conn.close()

    def find_by_owner(
        self,
        owner: str,
        page: int,
        size: int,
        sort_field: str,
        direction: str,
    ) -> List[CardRead]:
        # Identifiers cannot be bound as parameters, so both parts of the
        # ORDER BY clause come from the whitelists above.
        column = SORTABLE_COLUMNS[sort_field]
        order = SORT_DIRECTIONS[direction]
        query = (
            "SELECT id, amount, owner FROM cash_cards WHERE owner = ? "
            f"ORDER BY {column} {order}, id ASC LIMIT ? OFFSET ?"
        )
        conn = get_connection()
        try:
            rows = conn.execute(query, (owner, size, page * size)).fetchall()
            return [self._row_to_card(row) for row in rows]
        finally:
            conn.close()

    def exists_by_id_and_owner(self, card_id: int, owner: str) -> bool:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT 1 FROM cash_cards WHERE id = ? AND owner = ?",
                (card_id, owner),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def insert(self, amount: float, owner: str) -> CardRead:
        conn = get_connection()
        try:
            cursor = conn.execute(
                "INSERT INTO cash_cards (amount, owner) VALUES (?, ?)",
                (amount, owner),
            )
            conn.commit()
            return CardRead(id=cursor.lastrowid, amount=amount, owner=owner)
        finally:
            conn.close()

    def update_amount(self, card_id: int, owner: str, amount: float) -> bool:
        conn = get_connection()
        try:
            cursor = conn.execute(
                "UPDATE cash_cards SET amount = ? WHERE id = ? AND owner = ?",
                (amount, card_id, owner),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete_by_id_and_owner(self, card_id: int, owner: str) -> bool:
        conn = get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM cash_cards WHERE id = ? AND owner = ?",
                (card_id, owner),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
