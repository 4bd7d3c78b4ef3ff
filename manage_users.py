#!/usr/bin/env python3
"""
Manage CashCard API accounts in the SQLite database.

Two commands are supported:

* ``add`` creates a user with a role (``CARD-OWNER`` grants card access).
* ``reset-password`` sets a new password for an existing user.

Existing passwords are never read or revealed; a new PBKDF2 hash
(format ``salthex$hashhex``) is written.  The database must already
exist (start the API once to apply the migrations).

Usage:
    python manage_users.py --db ./cashcard_api/cashcard.db add --username alice --role CARD-OWNER
    python manage_users.py --db ./cashcard_api/cashcard.db reset-password --username alice

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys
from typing import List, Optional

from cashcard_api.app.core.security import hash_password


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage CashCard API users (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./cashcard_api/cashcard.db)")
    commands = ap.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Create a new user")
    add.add_argument("--username", required=True, help="Name used for HTTP Basic authentication")
    add.add_argument("--role", default="CARD-OWNER", help="Role of the user (default: CARD-OWNER)")
    add.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")

    reset = commands.add_parser("reset-password", help="Set a new password for a user")
    reset.add_argument("--username", required=True, help="User to update")
    reset.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1
    hashed = hash_password(password)

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM users WHERE username = ?", (args.username,))
        row = cur.fetchone()

        if args.command == "add":
            if row:
                print(f"[!] User already exists: {args.username}", file=sys.stderr)
                return 2
            cur.execute(
                "INSERT INTO users (username, password, role) VALUES (?, ?, ?)",
                (args.username, hashed, args.role),
            )
            conn.commit()
            print(f"[+] Created user {args.username} with role {args.role}")
            return 0

        if not row:
            print(f"[!] No user found with username: {args.username}", file=sys.stderr)
            return 2
        cur.execute(
            "UPDATE users SET password = ? WHERE username = ?",
            (hashed, args.username),
        )
        conn.commit()
        print(f"[+] Password updated for user: {args.username}")
        return 0
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())
