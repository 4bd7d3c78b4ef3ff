from cashcard_api.app.core.security import authenticate_user, hash_password, verify_password


def test_hash_round_trip():
    hashed = hash_password("abc123")

    assert verify_password("abc123", hashed)
    assert not verify_password("abc124", hashed)


def test_hashes_are_salted():
    assert hash_password("abc123") != hash_password("abc123")


def test_malformed_hash_never_matches():
    assert not verify_password("abc123", "not-a-hash")
    assert not verify_password("abc123", "zz$zz")


def test_authenticate_demo_users(db_path):
    assert authenticate_user("sarah1", "abc123") == {
        "sub": "sarah1",
        "user_id": 1,
        "role": "CARD-OWNER",
    }
    assert authenticate_user("hank-owns-no-cards", "qrs456")["role"] == "NON-OWNER"
    assert authenticate_user("sarah1", "xyz789") is None
    assert authenticate_user("nobody", "abc123") is None
