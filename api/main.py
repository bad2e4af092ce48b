from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db
from core.config import Settings, get_settings
from core.errors import register_exception_handlers
from core.log import configure_logging
from experiences import router as experiences_router

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    # Initialize the DB pool once per process.
    await db.init_pool(settings)
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="portfolio-api", version=API_VERSION, lifespan=lifespan)

# The portfolio frontend calls this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

v1 = APIRouter(prefix="/v1")


@v1.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict:
    return {"status": "ok", "env": settings.app_env, "version": API_VERSION}


v1.include_router(experiences_router.router, tags=["experiences"])
app.include_router(v1)


@app.get("/")
def root() -> dict:
    return {"message": "portfolio api"}
