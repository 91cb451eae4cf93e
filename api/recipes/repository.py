"""
Recipe persistence (raw SQL), including the recipe_ingredient link table.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.errors import NotFoundError, StoreError, translate_store_error

ENTITY = "recipe"

_COLUMNS = "id, name, created, last_modified"


def _not_found(recipe_id: Any) -> NotFoundError:
    return NotFoundError(f"Recipe not found: {recipe_id}")


async def _fetch_one(sql: str, *args: Any) -> dict | None:
    try:
        return await db.fetch_one(sql, *args)
    except StoreError as exc:
        raise translate_store_error(exc, entity=ENTITY) from exc


async def _fetch_all(sql: str, *args: Any) -> list[dict]:
    try:
        return await db.fetch_all(sql, *args)
    except StoreError as exc:
        raise translate_store_error(exc, entity=ENTITY) from exc


async def list_recipes() -> list[dict]:
    return await _fetch_all(f"SELECT {_COLUMNS} FROM recipe")


async def get_recipe_by_id(recipe_id: Any) -> dict:
    row = await _fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM recipe
        WHERE id = CAST($1::text AS uuid)
        """,
        db.identifier_param(recipe_id),
    )
    if row is None:
        raise _not_found(recipe_id)
    return row


async def add_recipe(*, name: str | None) -> dict:
    row = await _fetch_one(
        f"""
        INSERT INTO recipe (name)
        VALUES ($1)
        RETURNING {_COLUMNS}
        """,
        name,
    )
    if row is None:
        raise StoreError("Failed to create recipe.")
    return row


async def update_recipe(recipe_id: Any, *, name: str | None) -> dict:
    row = await _fetch_one(
        f"""
        UPDATE recipe
        SET name = $1,
            last_modified = now()
        WHERE id = CAST($2::text AS uuid)
        RETURNING {_COLUMNS}
        """,
        name,
        db.identifier_param(recipe_id),
    )
    if row is None:
        raise _not_found(recipe_id)
    return row


async def delete_recipe(recipe_id: Any) -> bool:
    row = await _fetch_one(
        """
        DELETE FROM recipe
        WHERE id = CAST($1::text AS uuid)
        RETURNING id
        """,
        db.identifier_param(recipe_id),
    )
    if row is None:
        raise _not_found(recipe_id)
    return True


async def list_ingredient_links(recipe_id: Any) -> list[dict]:
    """
    Link rows for a recipe, in the order the store returns them.
    """
    return await _fetch_all(
        """
        SELECT recipe, ingredient, amount
        FROM recipe_ingredient
        WHERE recipe = CAST($1::text AS uuid)
        """,
        db.identifier_param(recipe_id),
    )


async def add_ingredient_link(recipe_id: Any, ingredient_id: Any, *, amount: Any = None) -> dict:
    if not amount:
        row = await _fetch_one(
            """
            INSERT INTO recipe_ingredient (recipe, ingredient)
            VALUES (CAST($1::text AS uuid), CAST($2::text AS uuid))
            RETURNING recipe, ingredient, amount
            """,
            db.identifier_param(recipe_id),
            db.identifier_param(ingredient_id),
        )
    else:
        row = await _fetch_one(
            """
            INSERT INTO recipe_ingredient (recipe, ingredient, amount)
            VALUES (CAST($1::text AS uuid), CAST($2::text AS uuid), $3)
            RETURNING recipe, ingredient, amount
            """,
            db.identifier_param(recipe_id),
            db.identifier_param(ingredient_id),
            amount,
        )
    if row is None:
        raise StoreError("Failed to link ingredient to recipe.")
    return row


async def delete_ingredient_link(recipe_id: Any, ingredient_id: Any) -> bool:
    row = await _fetch_one(
        """
        DELETE FROM recipe_ingredient
        WHERE recipe = CAST($1::text AS uuid)
          AND ingredient = CAST($2::text AS uuid)
        RETURNING recipe
        """,
        db.identifier_param(recipe_id),
        db.identifier_param(ingredient_id),
    )
    if row is None:
        raise NotFoundError(f"Ingredient {ingredient_id} is not linked to recipe {recipe_id}.")
    return True
