# stockdesk/main.py
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

load_dotenv()

from stockdesk.config import settings
from stockdesk.errors import InvalidInputError, NotFoundError
from stockdesk.repositories import build_store

# Routers
from stockdesk.routes.products import router as products_router
from stockdesk.routes.suppliers import router as suppliers_router
from stockdesk.routes.stock import router as stock_router
from stockdesk.routes.sales_orders import router as sales_orders_router
from stockdesk.routes.purchase_orders import router as purchase_orders_router
from stockdesk.routes.reports import router as reports_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Stockdesk API", version="1.0.0")

# Collections live in the store built from settings
app.state.store = build_store(settings)

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error mapping ===

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# A partial update that leaves a record in an invalid state
@app.exception_handler(ValidationError)
async def record_validation_handler(request: Request, exc: ValidationError):
    logger.warning("Rejected update on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors(include_url=False, include_context=False))})


# Router registration
app.include_router(products_router)
app.include_router(suppliers_router)
app.include_router(stock_router)
app.include_router(sales_orders_router)
app.include_router(purchase_orders_router)
app.include_router(reports_router)


@app.get("/")
def read_root():
    return {"message": "Stockdesk API is running"}
