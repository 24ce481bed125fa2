"""KittenTrack API application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads os.getenv()

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.routes import (
    health_router, kittens_router, sample_data_router, weights_router,
)
from app.services.database import DATABASE_URL, Database

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database and bring its schema up to date for the process lifetime."""
    database = Database(DATABASE_URL)
    await database.open()
    await database.migrate()
    app.state.database = database
    logger.info("KittenTrack API started")

    yield

    await database.close()
    logger.info("KittenTrack API stopped")


app = FastAPI(
    title="KittenTrack API",
    description="Rescue kitten registry with weight tracking.",
    version="1.0.0",
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(kittens_router)
app.include_router(weights_router)
app.include_router(sample_data_router)
