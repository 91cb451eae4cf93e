"""
Recipe business logic: resolving a recipe's ingredients and total cost.

Scope:
- base recipe lookup (errors propagate unchanged)
- link rows from recipe_ingredient
- concurrent per-ingredient lookups, joined before aggregation
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any

from core.errors import DanglingReferenceError, NotFoundError
from ingredients import repository as ingredient_repository

from . import repository

logger = logging.getLogger(__name__)


async def _fetch_linked_ingredient(link: dict) -> dict:
    try:
        ingredient = await ingredient_repository.get_ingredient_by_id(link["ingredient"])
    except NotFoundError as exc:
        raise DanglingReferenceError(
            f"Recipe {link['recipe']} links missing ingredient {link['ingredient']}."
        ) from exc
    return {**ingredient, "amount": link.get("amount")}


def total_cost(ingredients: list[dict]) -> Decimal:
    return sum((Decimal(str(item.get("price") or 0)) for item in ingredients), Decimal("0"))


async def resolve_recipe(recipe_id: Any) -> dict:
    """
    Return the recipe with its linked ingredients (in link order) and total cost.

    All ingredient lookups run concurrently and are awaited in full. If any of
    them failed, the first failure in link order is raised and nothing is
    aggregated.
    """
    recipe = await repository.get_recipe_by_id(recipe_id)
    links = await repository.list_ingredient_links(recipe_id)
    if not links:
        return {**recipe, "ingredients": [], "total_cost": Decimal("0")}

    results = await asyncio.gather(
        *(_fetch_linked_ingredient(link) for link in links),
        return_exceptions=True,
    )

    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        logger.warning(
            "recipe_resolve_failed recipe_id=%s links=%s failures=%s",
            recipe_id,
            len(links),
            len(failures),
        )
        raise failures[0]

    return {**recipe, "ingredients": results, "total_cost": total_cost(results)}
