from cashcard_api.app.core.security import authenticate_user

import manage_users


def test_add_user(db_path):
    code = manage_users.main(
        ["--db", str(db_path), "add", "--username", "alice", "--role", "CARD-OWNER", "--password", "pw1"]
    )

    assert code == 0
    assert authenticate_user("alice", "pw1")["role"] == "CARD-OWNER"


def test_add_existing_user_fails(db_path, capsys):
    code = manage_users.main(["--db", str(db_path), "add", "--username", "sarah1", "--password", "x"])

    assert code == 2
    assert "already exists" in capsys.readouterr().err


def test_reset_password(db_path):
    code = manage_users.main(
        ["--db", str(db_path), "reset-password", "--username", "kumar2", "--password", "new-secret"]
    )

    assert code == 0
    assert authenticate_user("kumar2", "new-secret") is not None
    assert authenticate_user("kumar2", "xyz789") is None


def test_reset_unknown_user(db_path):
    code = manage_users.main(["--db", str(db_path), "reset-password", "--username", "ghost", "--password", "x"])

    assert code == 2


def test_missing_database(tmp_path):
    code = manage_users.main(["--db", str(tmp_path / "nope.db"), "add", "--username", "a", "--password", "x"])

    assert code == 1


def test_prompts_for_password(db_path, monkeypatch):
    monkeypatch.setattr(manage_users.getpass, "getpass", lambda prompt: "")

    code = manage_users.main(["--db", str(db_path), "add", "--username", "bob"])

    assert code == 1
