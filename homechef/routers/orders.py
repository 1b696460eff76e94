from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, unit_of_work
from ..models import OrderStatus
from ..services import orders as order_service
from ..services import payments as payment_service
from ..services.orders import OrderLine

router = APIRouter()


@router.post("/orders", response_model=schemas.OrderOut, status_code=status.HTTP_201_CREATED)
def place_order(order_in: schemas.OrderCreate, db: Session = Depends(get_db)):
    """Price the items, apply the coupon and create the order in one transaction."""
    def work():
        return order_service.place_order(
            db,
            user_id=order_in.user_id,
            chef_id=order_in.chef_id,
            address_id=order_in.address_id,
            items=[OrderLine(**item.model_dump()) for item in order_in.items],
            coupon_code=order_in.coupon_code,
            delivery_instructions=order_in.delivery_instructions,
            estimated_delivery=order_in.estimated_delivery,
        )

    return unit_of_work(db, work)


@router.get("/orders", response_model=list[schemas.OrderOut])
def list_orders(
    user_id: Optional[int] = None,
    chef_id: Optional[int] = None,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return order_service.list_orders(
        db, user_id=user_id, chef_id=chef_id, status=order_status, limit=limit, offset=offset
    )


@router.get("/orders/{order_id}", response_model=schemas.OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id)


@router.post("/orders/{order_id}/status", response_model=schemas.OrderOut)
def update_order_status(order_id: int, body: schemas.OrderStatusUpdate, db: Session = Depends(get_db)):
    return unit_of_work(db, lambda: order_service.advance_order(db, order_id, body.status))


# --- Payments ---

@router.get("/orders/{order_id}/payments", response_model=list[schemas.PaymentOut])
def list_payments(order_id: int, db: Session = Depends(get_db)):
    return payment_service.list_payments(db, order_id)


@router.post(
    "/orders/{order_id}/payments",
    response_model=schemas.PaymentOut,
    status_code=status.HTTP_201_CREATED,
)
def record_payment(order_id: int, payment_in: schemas.PaymentCreate, db: Session = Depends(get_db)):
    return unit_of_work(
        db, lambda: payment_service.record_payment(db, order_id, **payment_in.model_dump())
    )


@router.post("/payments/{payment_id}/status", response_model=schemas.PaymentOut)
def update_payment_status(payment_id: int, body: schemas.PaymentStatusUpdate, db: Session = Depends(get_db)):
    return unit_of_work(
        db,
        lambda: payment_service.update_payment_status(
            db, payment_id, body.status, transaction_id=body.transaction_id
        ),
    )
