"""
Service layer for customers.

Customers are plain records (first and last name) with a
store-assigned id.  Besides the usual CRUD operations the service
supports finding every customer with a given last name.

All queries use parameterized statements to avoid SQL injection.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from cashcard_api.app.core.db import get_connection
from cashcard_api.app.schemas.customer import CustomerCreate, CustomerRead


class CustomerService:
    """Service class for managing customers."""

    @classmethod
    async def create_customer(cls, data: CustomerCreate) -> CustomerRead:
        """Insert a new customer and return the created record."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO customers (first_name, last_name) VALUES (?, ?)",
                (data.first_name, data.last_name),
            )
            customer_id = cursor.lastrowid
            conn.commit()
            logger.info("Created customer %s", customer_id)
            return CustomerRead(id=customer_id, first_name=data.first_name, last_name=data.last_name)
        finally:
            conn.close()

    @classmethod
    async def get_customer(cls, customer_id: int) -> Optional[CustomerRead]:
        """Retrieve a single customer by its ID."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM customers WHERE id = ?",
                (customer_id,),
            ).fetchone()
            if not row:
                return None
            return cls._row_to_customer(row)
        finally:
            conn.close()

    @classmethod
    async def find_by_last_name(
        cls, last_name: str, limit: int = 100, offset: int = 0
    ) -> List[CustomerRead]:
        """Return a page of customers whose last name equals ``last_name``, ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM customers WHERE last_name = ? ORDER BY id ASC LIMIT ? OFFSET ?",
                (last_name, limit, offset),
            ).fetchall()
            return [cls._row_to_customer(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_customers(cls, limit: int = 100, offset: int = 0) -> List[CustomerRead]:
        """Return a page of customers ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM customers ORDER BY id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_customer(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def delete_customer(cls, customer_id: int) -> bool:
        """Delete a customer by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted customer %s", customer_id)
            return affected > 0
        finally:
            conn.close()

    @staticmethod
    def _row_to_customer(row: sqlite3.Row) -> CustomerRead:
        return CustomerRead(id=row["id"], first_name=row["first_name"], last_name=row["last_name"])
