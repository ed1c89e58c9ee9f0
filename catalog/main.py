# catalog/main.py

import logging
import sys
import time

import uvicorn
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from .config import (
    APP_HOST,
    APP_PORT,
    CORS_ALLOW_ORIGINS,
    DB_CONNECT_MAX_RETRIES,
    DB_CONNECT_RETRY_DELAY_SECONDS,
    LOG_LEVEL,
    SEED_PRODUCTS,
)
from .controller import router as products_router
from .db import engine
from .schemas import HealthResponse
from .seed import init_db

# --- Standard Logging Configuration ---
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# --- FastAPI Application Setup ---
app = FastAPI(
    title="Product Catalog API",
    description="CRUD and search over a product catalog.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products_router)


# --- FastAPI Event Handlers ---
@app.on_event("startup")
async def startup_event():
    for i in range(DB_CONNECT_MAX_RETRIES):
        try:
            logger.info(
                f"Product Catalog: Attempting to create tables (attempt {i+1}/{DB_CONNECT_MAX_RETRIES})..."
            )
            init_db(engine, seed=SEED_PRODUCTS)
            logger.info("Product Catalog: Database ready.")
            break
        except OperationalError as e:
            logger.warning(f"Product Catalog: Failed to connect to the database: {e}")
            if i < DB_CONNECT_MAX_RETRIES - 1:
                logger.info(
                    f"Product Catalog: Retrying in {DB_CONNECT_RETRY_DELAY_SECONDS} seconds..."
                )
                time.sleep(DB_CONNECT_RETRY_DELAY_SECONDS)
            else:
                logger.critical(
                    f"Product Catalog: Database unavailable after {DB_CONNECT_MAX_RETRIES} attempts. Exiting application."
                )
                sys.exit(1)
        except Exception as e:
            logger.critical(
                f"Product Catalog: An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    return {"message": "Welcome to the Product Catalog!"}


# --- Health Check Endpoint ---
@app.get(
    "/api/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
)
async def health_check():
    return {"status": "ok", "service": "product-catalog"}


def run():
    uvicorn.run("catalog.main:app", host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    run()
