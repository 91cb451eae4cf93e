"""
Ingredient API endpoints.

Domain errors raised by the repository are rendered by the handlers in
`main.py`; this module only checks request shape.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from . import repository, schemas

# Routes return raw rows. response_model=None keeps jsonable_encoder, which
# renders numeric columns as JSON numbers instead of strings.
router = APIRouter()


@router.get("", response_model=None)
async def list_ingredients() -> list[dict]:
    return await repository.list_ingredients()


@router.get("/{ingredient_id}", response_model=None)
async def get_ingredient(ingredient_id: str) -> dict:
    return await repository.get_ingredient_by_id(ingredient_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
async def create_ingredient(request: schemas.IngredientCreateRequest) -> dict:
    return await repository.add_ingredient(name=request.name, price=request.price)


@router.put("/{ingredient_id}", response_model=None)
async def update_ingredient(ingredient_id: str, request: schemas.IngredientUpdateRequest) -> dict:
    if request.name is None and request.price is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You must provide either a name or a price.",
        )
    return await repository.update_ingredient(
        ingredient_id,
        name=request.name,
        price=request.price,
    )


@router.delete("/{ingredient_id}", response_model=None)
async def delete_ingredient(ingredient_id: str) -> dict:
    success = await repository.delete_ingredient(ingredient_id)
    return {"success": success}
