"""
Recipe repository tests against the fake store.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import make_recipe
from core import errors
from core.errors import (
    DanglingReferenceError,
    EmptyFieldError,
    InvalidIdentifierError,
    MissingRequiredFieldError,
    NotFoundError,
    StoreError,
)
from recipes import repository

MISSING_ID = "cd386d13-0773-4759-b0e8-779444791fa4"


def _invalid_uuid(value) -> StoreError:
    return StoreError(
        f'invalid input syntax for type uuid: "{value}"',
        sqlstate=errors.INVALID_TEXT_REPRESENTATION,
    )


@pytest.mark.asyncio
async def test_list_recipes(store):
    rows = [make_recipe("a"), make_recipe("b")]
    store.queue(rows)

    assert await repository.list_recipes() == rows


@pytest.mark.asyncio
async def test_get_recipe(store):
    row = make_recipe()
    store.queue(row)

    assert await repository.get_recipe_by_id(str(row["id"])) == row


@pytest.mark.asyncio
async def test_get_recipe_not_found(store):
    with pytest.raises(NotFoundError, match="Recipe not found"):
        await repository.get_recipe_by_id(MISSING_ID)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda: repository.get_recipe_by_id("not-a-uuid"),
        lambda: repository.update_recipe("not-a-uuid", name="x"),
        lambda: repository.delete_recipe("not-a-uuid"),
        lambda: repository.list_ingredient_links("not-a-uuid"),
    ],
)
async def test_malformed_id_on_every_operation(store, call):
    store.queue(_invalid_uuid("not-a-uuid"))

    with pytest.raises(InvalidIdentifierError):
        await call()


@pytest.mark.asyncio
async def test_add_recipe(store):
    row = make_recipe("rezept1")
    store.queue(row)

    assert await repository.add_recipe(name="rezept1") == row
    assert store.last_args == ("rezept1",)


@pytest.mark.asyncio
async def test_add_recipe_missing_name(store):
    store.queue(StoreError('null value in column "name"', sqlstate=errors.NOT_NULL_VIOLATION))

    with pytest.raises(MissingRequiredFieldError):
        await repository.add_recipe(name=None)


@pytest.mark.asyncio
async def test_add_recipe_empty_name(store):
    store.queue(
        StoreError(
            "violates check constraint",
            sqlstate=errors.CHECK_VIOLATION,
            constraint_name="recipe_name_not_empty",
        )
    )

    with pytest.raises(EmptyFieldError):
        await repository.add_recipe(name="")


@pytest.mark.asyncio
async def test_update_recipe_bumps_last_modified(store):
    row = make_recipe("cool sample recipe")
    row["last_modified"] = row["created"] + timedelta(seconds=1)
    store.queue(row)

    updated = await repository.update_recipe(str(row["id"]), name="cool sample recipe")

    assert updated["last_modified"] != updated["created"]
    sql, args = store.calls[-1]
    assert "last_modified = now()" in sql
    assert args == ("cool sample recipe", str(row["id"]))


@pytest.mark.asyncio
async def test_update_recipe_not_found(store):
    with pytest.raises(NotFoundError):
        await repository.update_recipe(MISSING_ID, name="x")


@pytest.mark.asyncio
async def test_delete_recipe(store):
    store.queue({"id": MISSING_ID})
    assert await repository.delete_recipe(MISSING_ID) is True


@pytest.mark.asyncio
async def test_delete_recipe_not_found(store):
    with pytest.raises(NotFoundError):
        await repository.delete_recipe(MISSING_ID)


class TestIngredientLinks:
    @pytest.mark.asyncio
    async def test_list_links(self, store):
        recipe_id = uuid.uuid4()
        links = [
            {"recipe": recipe_id, "ingredient": uuid.uuid4(), "amount": None},
            {"recipe": recipe_id, "ingredient": uuid.uuid4(), "amount": Decimal("2")},
        ]
        store.queue(links)

        assert await repository.list_ingredient_links(recipe_id) == links
        assert store.last_args == (str(recipe_id),)

    @pytest.mark.asyncio
    async def test_add_link_without_amount(self, store):
        store.queue({"recipe": "r", "ingredient": "i", "amount": None})

        await repository.add_ingredient_link("r", "i")

        sql, args = store.calls[-1]
        assert "INSERT INTO recipe_ingredient (recipe, ingredient)" in sql
        assert args == ("r", "i")

    @pytest.mark.asyncio
    async def test_add_link_with_amount(self, store):
        store.queue({"recipe": "r", "ingredient": "i", "amount": Decimal("3")})

        link = await repository.add_ingredient_link("r", "i", amount=Decimal("3"))

        assert link["amount"] == Decimal("3")
        assert store.last_args == ("r", "i", Decimal("3"))

    @pytest.mark.asyncio
    async def test_add_link_to_missing_entity(self, store):
        store.queue(StoreError("violates foreign key constraint", sqlstate=errors.FOREIGN_KEY_VIOLATION))

        with pytest.raises(DanglingReferenceError):
            await repository.add_ingredient_link(MISSING_ID, MISSING_ID)

    @pytest.mark.asyncio
    async def test_delete_link(self, store):
        store.queue({"recipe": MISSING_ID})
        assert await repository.delete_ingredient_link(MISSING_ID, MISSING_ID) is True

    @pytest.mark.asyncio
    async def test_delete_missing_link(self, store):
        with pytest.raises(NotFoundError, match="not linked"):
            await repository.delete_ingredient_link(MISSING_ID, MISSING_ID)
