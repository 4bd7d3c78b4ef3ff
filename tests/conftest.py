from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from cashcard_api.app.core import security
from cashcard_api.app.core.config import settings
from cashcard_api.app.core.db import get_connection, init_db
from cashcard_api.app.main import create_app
from cashcard_api.app.schemas.card import CardRead
from cashcard_api.app.services.card_store import SORT_DIRECTIONS, SORTABLE_COLUMNS

SARAH = ("sarah1", "abc123")
KUMAR = ("kumar2", "xyz789")
HANK = ("hank-owns-no-cards", "qrs456")

# (id, amount, owner)
SAMPLE_CARDS = [
    (99, 123.45, "sarah1"),
    (100, 1.00, "sarah1"),
    (101, 150.00, "sarah1"),
    (102, 200.00, "kumar2"),
]


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(security, "PBKDF2_ITERATIONS", 1_000)


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "cashcard.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(settings, "seed_demo_users", True)
    init_db()
    return path


@pytest.fixture
def sample_cards(db_path):
    conn = get_connection()
    try:
        conn.executemany(
            "INSERT INTO cash_cards (id, amount, owner) VALUES (?, ?, ?)",
            SAMPLE_CARDS,
        )
        conn.commit()
    finally:
        conn.close()
    return SAMPLE_CARDS


@pytest.fixture
def client(db_path):
    with TestClient(create_app()) as c:
        yield c


class InMemoryCardStore:
    """Dict-backed card store used by the service tests."""

    def __init__(self, cards: Optional[List[Tuple[int, float, str]]] = None):
        self.cards: Dict[int, CardRead] = {}
        self.next_id = 1
        for card_id, amount, owner in cards or []:
            self.cards[card_id] = CardRead(id=card_id, amount=amount, owner=owner)
            self.next_id = max(self.next_id, card_id + 1)

    def find_by_id_and_owner(self, card_id, owner):
        card = self.cards.get(card_id)
        if card is None or card.owner != owner:
            return None
        return card

    def find_by_owner(self, owner, page, size, sort_field, direction):
        assert sort_field in SORTABLE_COLUMNS and direction in SORT_DIRECTIONS
        owned = sorted((c for c in self.cards.values() if c.owner == owner), key=lambda c: c.id)
        owned.sort(key=lambda c: getattr(c, sort_field), reverse=direction == "desc")
        return owned[page * size:(page + 1) * size]

    def exists_by_id_and_owner(self, card_id, owner):
        return self.find_by_id_and_owner(card_id, owner) is not None

    def insert(self, amount, owner):
        card = CardRead(id=self.next_id, amount=amount, owner=owner)
        self.cards[card.id] = card
        self.next_id += 1
        return card

    def update_amount(self, card_id, owner, amount):
        card = self.find_by_id_and_owner(card_id, owner)
        if card is None:
            return False
        self.cards[card_id] = CardRead(id=card_id, amount=amount, owner=owner)
        return True

    def delete_by_id_and_owner(self, card_id, owner):
        card = self.cards.get(card_id)
        if card is None or card.owner != owner:
            return False
        del self.cards[card_id]
        return True
