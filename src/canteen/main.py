import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from canteen.config import settings
from canteen.log import setup_logging
from .api import health
from canteen.api.routes.cart import router as cart_router
from canteen.api.routes.items import router as items_router
from canteen.api.routes.orders import router as orders_router
from canteen.api.routes.owner import router as owner_router
from canteen.api.routes.payment_qr import router as payment_qr_router
from canteen.api.routes.reports import router as reports_router
from canteen.api.routes.tables import router as tables_router
from canteen.api.routes.upload import router as upload_router

setup_logging()
logger = logging.getLogger("canteen")

app = FastAPI(title="Canteen Ordering")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роуты
app.include_router(health.router)
for router in (
    items_router,
    upload_router,
    tables_router,
    orders_router,
    payment_qr_router,
    reports_router,
    owner_router,
    cart_router,
):
    app.include_router(router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # ошибки валидации отдаём как 400, а не 422
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("%s %s failed: database error", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.on_event("startup")
async def on_startup():
    logger.info("🚀 Application started")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("🛑 Application stopped")
