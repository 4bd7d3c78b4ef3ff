from cashcard_api.app.services.card_store import SQLiteCardStore


def test_find_by_id_and_owner(sample_cards):
    store = SQLiteCardStore()

    assert store.find_by_id_and_owner(99, "sarah1").amount == 123.45
    assert store.find_by_id_and_owner(99, "kumar2") is None
    assert store.find_by_id_and_owner(12345, "sarah1") is None


def test_find_by_owner_pages_and_sorts(sample_cards):
    store = SQLiteCardStore()

    first = store.find_by_owner("sarah1", 0, 2, "amount", "desc")
    second = store.find_by_owner("sarah1", 1, 2, "amount", "desc")

    assert [c.amount for c in first] == [150.00, 123.45]
    assert [c.amount for c in second] == [1.00]
    assert store.find_by_owner("sarah1", 2, 2, "amount", "desc") == []


def test_find_by_owner_breaks_ties_by_id(db_path):
    store = SQLiteCardStore()
    ids = [store.insert(7.0, "sarah1").id for _ in range(3)]

    assert [c.id for c in store.find_by_owner("sarah1", 0, 10, "amount", "desc")] == ids


def test_insert_assigns_increasing_ids(sample_cards):
    store = SQLiteCardStore()

    first = store.insert(1.0, "sarah1")
    second = store.insert(2.0, "sarah1")

    assert first.id > 102
    assert second.id == first.id + 1


def test_update_and_delete_are_owner_scoped(sample_cards):
    store = SQLiteCardStore()

    assert store.update_amount(102, "sarah1", 0.0) is False
    assert store.delete_by_id_and_owner(102, "sarah1") is False
    assert store.find_by_id_and_owner(102, "kumar2").amount == 200.00

    assert store.update_amount(102, "kumar2", 200.00) is True
    assert store.delete_by_id_and_owner(102, "kumar2") is True
    assert store.exists_by_id_and_owner(102, "kumar2") is False
