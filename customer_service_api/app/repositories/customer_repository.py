"""
SQLite-backed record store for customers.

``CustomerRepository`` provides lookup by surrogate id and by mobile
number, insert/update through ``save``, delete by surrogate id, a
sorted and paginated scan, and substring search over name and mobile
number.  The store stamps the audit columns itself: ``created_*`` on
insert and ``updated_*`` on every update, using the configured audit
actor.

All queries use parameterized statements.  Database errors are
translated into the service exception hierarchy: a violation of the
unique index on ``mobile_number`` becomes
``CustomerAlreadyExistsError``, anything else ``StoreFailureError``.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from ..core.config import settings
from ..core.db import get_connection
from ..core.exceptions import CustomerAlreadyExistsError, StoreFailureError
from ..schemas.customer import Customer

logger = logging.getLogger(__name__)

# Sortable properties mapped to their columns.  Keys are the camelCase
# names clients send; snake_case spellings are accepted as well.
SORT_COLUMNS = {
    "customerId": "customer_id",
    "name": "name",
    "email": "email",
    "mobileNumber": "mobile_number",
    "branchAddress": "branch_address",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
SORT_COLUMNS.update({column: column for column in list(SORT_COLUMNS.values())})
DEFAULT_SORT_COLUMN = "customer_id"

# ISO-8601 UTC, e.g. 2025-09-01T09:00:00Z
_NOW = "strftime('%Y-%m-%dT%H:%M:%SZ', 'now')"

_COLUMNS = (
    "customer_id, name, email, mobile_number, branch_address, "
    "created_at, created_by, updated_at, updated_by"
)


class CustomerRepository:
    """Data access for the ``customers`` table."""

    @staticmethod
    @contextmanager
    def _connection(mobile_number: Optional[str] = None) -> Iterator[sqlite3.Connection]:
        """Yield a connection and translate database errors on the way out.

        ``mobile_number`` is only used to name the duplicate when the
        unique index rejects a write.
        """
        conn = get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "customers.mobile_number" in str(exc):
                raise CustomerAlreadyExistsError(mobile_number or "") from exc
            logger.exception("Integrity error in customer store")
            raise StoreFailureError("customer store integrity error") from exc
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Customer store failure")
            raise StoreFailureError("customer store failure") from exc
        finally:
            conn.close()

    @staticmethod
    def _row_to_customer(row: sqlite3.Row) -> Customer:
        return Customer(**dict(row))

    @classmethod
    def find_by_id(cls, customer_id: int) -> Optional[Customer]:
        with cls._connection() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM customers WHERE customer_id = ?",
                (customer_id,),
            ).fetchone()
        return cls._row_to_customer(row) if row else None

    @classmethod
    def find_by_mobile_number(cls, mobile_number: str) -> Optional[Customer]:
        with cls._connection() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM customers WHERE mobile_number = ?",
                (mobile_number,),
            ).fetchone()
        return cls._row_to_customer(row) if row else None

    @classmethod
    def save(cls, customer: Customer) -> Customer:
        """Insert ``customer`` if it has no id yet, otherwise update it.

        Returns the stored record as re-read from the database, with
        ``customer_id`` and the audit columns filled in.  The passed
        instance is not modified.
        """
        with cls._connection(customer.mobile_number) as conn:
            cursor = conn.cursor()
            if customer.customer_id is None:
                cursor.execute(
                    f"""
                    INSERT INTO customers (name, email, mobile_number, branch_address, created_at, created_by)
                    VALUES (?, ?, ?, ?, {_NOW}, ?)
                    """,
                    (
                        customer.name,
                        customer.email,
                        customer.mobile_number,
                        customer.branch_address,
                        settings.audit_actor,
                    ),
                )
                customer_id = cursor.lastrowid
            else:
                customer_id = customer.customer_id
                cursor.execute(
                    f"""
                    UPDATE customers
                    SET name = ?, email = ?, mobile_number = ?, branch_address = ?,
                        updated_at = {_NOW}, updated_by = ?
                    WHERE customer_id = ?
                    """,
                    (
                        customer.name,
                        customer.email,
                        customer.mobile_number,
                        customer.branch_address,
                        settings.audit_actor,
                        customer_id,
                    ),
                )
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM customers WHERE customer_id = ?",
                (customer_id,),
            ).fetchone()
        return cls._row_to_customer(row)

    @classmethod
    def delete_by_customer_id(cls, customer_id: int) -> int:
        """Delete the record with ``customer_id``; return the number of rows removed."""
        with cls._connection() as conn:
            cursor = conn.execute("DELETE FROM customers WHERE customer_id = ?", (customer_id,))
            affected = cursor.rowcount
        return affected

    @classmethod
    def find_all(
        cls,
        page: int,
        size: int,
        sort_by: str = "customerId",
        ascending: bool = True,
    ) -> Tuple[List[Customer], int]:
        """Return one sorted page of customers and the total record count.

        ``page`` is zero-based.  Unknown ``sort_by`` values fall back
        to ``customer_id``.  Rows that tie on the sort column are
        ordered by ``customer_id`` so pages never overlap.
        """
        column = SORT_COLUMNS.get(sort_by)
        if column is None:
            logger.warning("Ignoring unknown sort field %r", sort_by)
            column = DEFAULT_SORT_COLUMN
        direction = "ASC" if ascending else "DESC"
        order_by = f"{column} {direction}"
        if column != DEFAULT_SORT_COLUMN:
            order_by += f", {DEFAULT_SORT_COLUMN} {direction}"
        with cls._connection() as conn:
            total = conn.execute("SELECT COUNT(*) AS count FROM customers").fetchone()["count"]
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM customers ORDER BY {order_by} LIMIT ? OFFSET ?",
                (size, page * size),
            ).fetchall()
        return [cls._row_to_customer(row) for row in rows], total

    @classmethod
    def find_by_name_or_phone(cls, search_term: str) -> List[Customer]:
        """Unicode case-insensitive substring match on name, plain substring on mobile number.

        ``instr`` is used instead of ``LIKE`` so that ``%`` and ``_`` in
        the term are matched literally.
        """
        with cls._connection() as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM customers
                WHERE instr(casefold(name), casefold(?)) > 0
                   OR instr(mobile_number, ?) > 0
                """,
                (search_term, search_term),
            ).fetchall()
        return [cls._row_to_customer(row) for row in rows]
