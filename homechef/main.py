# HomeChef API Main Entry Point
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from sqlalchemy.exc import IntegrityError, OperationalError

from .db import is_transaction_conflict
from .errors import HomeChefError, StoreUnavailable, TransactionConflict, translate_integrity_error
from .settings import settings
from .routers.ready import router as ready_router
from .routers.users import router as users_router
from .routers.catalog import router as catalog_router
from .routers.coupons import router as coupons_router
from .routers.orders import router as orders_router
from .routers.ratings import router as ratings_router

# Configure structured logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("homechef")

# Rate limiter (per-IP)
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])

app = FastAPI(title="HomeChef API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HomeChefError)
async def homechef_error_handler(request: Request, exc: HomeChefError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.__class__.__name__},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Constraint violations that escape deps.unit_of_work
    return await homechef_error_handler(request, translate_integrity_error(exc))


@app.exception_handler(OperationalError)
async def operational_error_handler(request: Request, exc: OperationalError):
    # Reads outside unit_of_work, or a write whose failure is not a conflict
    if is_transaction_conflict(exc):
        return await homechef_error_handler(request, TransactionConflict())
    logger.error(f"Database error on {request.method} {request.url.path}: {exc.orig}")
    return await homechef_error_handler(request, StoreUnavailable())


app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(users_router, prefix="/api", tags=["users"])
app.include_router(catalog_router, prefix="/api", tags=["catalog"])
app.include_router(coupons_router, prefix="/api", tags=["coupons"])
app.include_router(orders_router, prefix="/api", tags=["orders"])
app.include_router(ratings_router, prefix="/api", tags=["ratings"])
