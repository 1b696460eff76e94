from decimal import Decimal

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, unit_of_work
from ..services import coupons

router = APIRouter()


@router.post("/coupons", response_model=schemas.CouponOut, status_code=status.HTTP_201_CREATED)
def create_coupon(coupon_in: schemas.CouponCreate, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: coupons.create_coupon(db, **coupon_in.model_dump()))


@router.get("/coupons/{code}", response_model=schemas.CouponOut)
def get_coupon(code: str, db: Session = Depends(get_db)):
    return coupons.get_coupon_by_code(db, code)


@router.get("/coupons/{code}/quote", response_model=schemas.CouponQuoteOut)
def quote_coupon(code: str, subtotal: Decimal = Query(..., ge=0), db: Session = Depends(get_db)):
    """Preview the discount for a subtotal without consuming the coupon."""
    return coupons.quote_coupon(db, code, subtotal)
