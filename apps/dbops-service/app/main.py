import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import LOG_LEVEL
from .grants.reference import load_reference
from .routes.databases import router as database_router
from .routes.grants import router as grant_router
from .routes.roles import router as role_router
from .routes.settings_profiles import router as settings_profile_router
from .routes.storage import router as storage_router
from .routes.users import router as user_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    reference = load_reference()
    logger.info("DBOps service starting up, %d privileges known", len(reference.scopes))
    yield


app = FastAPI(title="ClickHouse DBOps Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(database_router)
app.include_router(role_router)
app.include_router(user_router)
app.include_router(grant_router)
app.include_router(settings_profile_router)
app.include_router(storage_router)


@app.get("/health")
def health():
    return {"status": "ok"}
