from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, unit_of_work
from ..services import ratings

router = APIRouter()


@router.post("/ratings", response_model=schemas.RatingOut, status_code=status.HTTP_201_CREATED)
def submit_rating(rating_in: schemas.RatingCreate, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: ratings.submit_rating(db, **rating_in.model_dump()))


@router.get("/ratings", response_model=list[schemas.RatingOut])
def list_ratings(
    recipe_id: Optional[int] = None,
    chef_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return ratings.list_ratings(db, recipe_id=recipe_id, chef_id=chef_id)
