"""
Recipe API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from . import repository, schemas, service

router = APIRouter()


@router.get("", response_model=None)
async def list_recipes() -> list[dict]:
    return await repository.list_recipes()


@router.get("/{recipe_id}", response_model=None)
async def get_recipe(
    recipe_id: str,
    with_ingredients: bool = Query(default=False, alias="withIngredients"),
) -> dict:
    """
    Return a recipe; with `?withIngredients=true` also its ingredients and total cost.
    """
    if with_ingredients:
        return await service.resolve_recipe(recipe_id)
    return await repository.get_recipe_by_id(recipe_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
async def create_recipe(request: schemas.RecipeCreateRequest) -> dict:
    return await repository.add_recipe(name=request.name)


@router.put("/{recipe_id}", response_model=None)
async def update_recipe(recipe_id: str, request: schemas.RecipeUpdateRequest) -> dict:
    return await repository.update_recipe(recipe_id, name=request.name)


@router.delete("/{recipe_id}", response_model=None)
async def delete_recipe(recipe_id: str) -> dict:
    success = await repository.delete_recipe(recipe_id)
    return {"success": success}


@router.post("/{recipe_id}/ingredients", status_code=status.HTTP_201_CREATED, response_model=None)
async def link_ingredient(recipe_id: str, request: schemas.IngredientLinkRequest) -> dict:
    return await repository.add_ingredient_link(
        recipe_id,
        request.ingredient,
        amount=request.amount,
    )


@router.delete("/{recipe_id}/ingredients/{ingredient_id}", response_model=None)
async def unlink_ingredient(recipe_id: str, ingredient_id: str) -> dict:
    success = await repository.delete_ingredient_link(recipe_id, ingredient_id)
    return {"success": success}
