import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from autoinspect.config import settings
from autoinspect.database import create_tables, async_session
from autoinspect.dependencies import verify_api_key
from autoinspect.seed import seed_data
from autoinspect.routers.vehicles import router as vehicles_router
from autoinspect.routers.inspections import router as inspections_router
from autoinspect.utils.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

SERVICE_NAME = "autoinspect-api"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    async with async_session() as session:
        await seed_data(session)
    yield


app = FastAPI(
    title="AutoInspect API",
    description="Vehicle catalogue, AI-assisted visual inspection and printable reports for dealerships",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(vehicles_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(inspections_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {"status": "success", "data": {"service": SERVICE_NAME, "version": VERSION}, "message": None}
