from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, unit_of_work
from ..services import users as user_service
from ..services import addresses as address_service

router = APIRouter()


@router.post("/users", response_model=schemas.UserOut, status_code=status.HTTP_201_CREATED)
def create_user(user_in: schemas.UserCreate, db: Session = Depends(get_db)):
    return unit_of_work(
        db,
        lambda: user_service.register_user(
            db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            phone=user_in.phone,
            roles=user_in.roles,
        ),
    )


@router.get("/users/{user_id}", response_model=schemas.UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Hard delete. Users referenced by orders or ratings get 409; deactivate them instead."""
    unit_of_work(db, lambda: user_service.delete_user(db, user_id))


@router.post("/users/{user_id}/deactivate", response_model=schemas.UserOut)
def deactivate_user(user_id: int, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: user_service.deactivate_user(db, user_id))


# --- Addresses ---

@router.get("/users/{user_id}/addresses", response_model=list[schemas.AddressOut])
def list_addresses(user_id: int, db: Session = Depends(get_db)):
    user_service.get_user(db, user_id)
    return address_service.list_addresses(db, user_id)


@router.post(
    "/users/{user_id}/addresses",
    response_model=schemas.AddressOut,
    status_code=status.HTTP_201_CREATED,
)
def add_address(user_id: int, address_in: schemas.AddressCreate, db: Session = Depends(get_db)):
    return unit_of_work(
        db, lambda: address_service.add_address(db, user_id, **address_in.model_dump())
    )


@router.put("/users/{user_id}/addresses/{address_id}/default", response_model=schemas.AddressOut)
def set_default_address(user_id: int, address_id: int, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: address_service.set_default_address(db, user_id, address_id))


@router.delete("/users/{user_id}/addresses/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_address(user_id: int, address_id: int, db: Session = Depends(get_db)):
    unit_of_work(db, lambda: address_service.delete_address(db, user_id, address_id))


# --- Chefs ---

@router.post("/chefs", response_model=schemas.ChefProfileOut, status_code=status.HTTP_201_CREATED)
def create_chef(chef_in: schemas.ChefProfileCreate, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: user_service.create_chef_profile(db, **chef_in.model_dump()))


@router.get("/chefs/{chef_id}", response_model=schemas.ChefProfileOut)
def get_chef(chef_id: int, db: Session = Depends(get_db)):
    return user_service.get_chef(db, chef_id)
