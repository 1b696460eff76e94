from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, unit_of_work
from ..services import catalog

router = APIRouter()


@router.get("/categories", response_model=list[schemas.CategoryOut])
def list_categories(active_only: bool = True, db: Session = Depends(get_db)):
    return catalog.list_categories(db, active_only=active_only)


@router.post("/categories", response_model=schemas.CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(category_in: schemas.CategoryCreate, db: Session = Depends(get_db)):
    return unit_of_work(
        db, lambda: catalog.create_category(db, category_in.category_name, category_in.description)
    )


@router.get("/recipes", response_model=list[schemas.RecipeOut])
def list_recipes(
    chef_id: Optional[int] = None,
    category_id: Optional[int] = None,
    available_only: bool = True,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return catalog.list_recipes(
        db,
        chef_id=chef_id,
        category_id=category_id,
        available_only=available_only,
        limit=limit,
        offset=offset,
    )


@router.post("/recipes", response_model=schemas.RecipeOut, status_code=status.HTTP_201_CREATED)
def create_recipe(recipe_in: schemas.RecipeCreate, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: catalog.create_recipe(db, **recipe_in.model_dump()))


@router.get("/recipes/{recipe_id}", response_model=schemas.RecipeOut)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    return catalog.get_recipe(db, recipe_id)


@router.patch("/recipes/{recipe_id}/availability", response_model=schemas.RecipeOut)
def set_availability(recipe_id: int, body: schemas.RecipeAvailability, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: catalog.set_recipe_availability(db, recipe_id, body.is_available))
