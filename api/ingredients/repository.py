"""
Ingredient persistence (raw SQL).

Identifiers are validated by the backend: they are sent as text and cast to
uuid in SQL, and the resulting failure is re-labelled `InvalidIdentifierError`.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.errors import NotFoundError, StoreError, translate_store_error

ENTITY = "ingredient"

_COLUMNS = "id, name, price, created, last_modified"


def _not_found(ingredient_id: Any) -> NotFoundError:
    return NotFoundError(f"Ingredient not found: {ingredient_id}")


async def _fetch_one(sql: str, *args: Any) -> dict | None:
    try:
        return await db.fetch_one(sql, *args)
    except StoreError as exc:
        raise translate_store_error(exc, entity=ENTITY) from exc


async def list_ingredients() -> list[dict]:
    try:
        return await db.fetch_all(f"SELECT {_COLUMNS} FROM ingredient")
    except StoreError as exc:
        raise translate_store_error(exc, entity=ENTITY) from exc


async def get_ingredient_by_id(ingredient_id: Any) -> dict:
    row = await _fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM ingredient
        WHERE id = CAST($1::text AS uuid)
        """,
        db.identifier_param(ingredient_id),
    )
    if row is None:
        raise _not_found(ingredient_id)
    return row


async def add_ingredient(*, name: str | None, price: Any = None) -> dict:
    """
    Insert an ingredient. A missing or zero price is stored as NULL.
    """
    if not price:
        row = await _fetch_one(
            f"""
            INSERT INTO ingredient (name)
            VALUES ($1)
            RETURNING {_COLUMNS}
            """,
            name,
        )
    else:
        row = await _fetch_one(
            f"""
            INSERT INTO ingredient (name, price)
            VALUES ($1, $2)
            RETURNING {_COLUMNS}
            """,
            name,
            price,
        )
    if row is None:
        raise StoreError("Failed to create ingredient.")
    return row


async def update_ingredient(ingredient_id: Any, *, name: str | None, price: Any = None) -> dict:
    if not price:
        row = await _fetch_one(
            f"""
            UPDATE ingredient
            SET name = $1,
                last_modified = now()
            WHERE id = CAST($2::text AS uuid)
            RETURNING {_COLUMNS}
            """,
            name,
            db.identifier_param(ingredient_id),
        )
    else:
        row = await _fetch_one(
            f"""
            UPDATE ingredient
            SET name = $1,
                price = $2,
                last_modified = now()
            WHERE id = CAST($3::text AS uuid)
            RETURNING {_COLUMNS}
            """,
            name,
            price,
            db.identifier_param(ingredient_id),
        )
    if row is None:
        raise _not_found(ingredient_id)
    return row


async def delete_ingredient(ingredient_id: Any) -> bool:
    row = await _fetch_one(
        """
        DELETE FROM ingredient
        WHERE id = CAST($1::text AS uuid)
        RETURNING id
        """,
        db.identifier_param(ingredient_id),
    )
    if row is None:
        raise _not_found(ingredient_id)
    return True
