# main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from academy import config
from academy.api.deps import get_store
from academy.api.v1.api import api_router
from academy.database import Base, engine
from academy.exceptions import InvariantViolation, StorageCorruptedError
from academy.models import *
from academy.services import seed_service

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the `collections` table
    Base.metadata.create_all(bind=engine)

    if config.SEED_SAMPLE_DATA:
        seed_service.seed_sample_data(get_store())

    logger.info("Academy API started.")
    yield
    logger.info("Academy API stopped.")


app = FastAPI(
    title="Academy Admin API",
    description="Courses, students, enrollments and payments for an academy.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvariantViolation)
async def invariant_violation_handler(request: Request, exc: InvariantViolation):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(StorageCorruptedError)
async def storage_corrupted_handler(request: Request, exc: StorageCorruptedError):
    logger.error(f"Storage corrupted while serving {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Stored collection '{exc.key}' is corrupted."},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"message": "Welcome to the Academy Admin API! Visit /docs for API documentation."}
