from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from pathlib import Path

from banner_service.api.router import api_router
from banner_service.core.config import settings
from banner_service.core.errors import BannerError
from banner_service.db.init_db import create_tables, seed_demo_data

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

def _run_migrations_if_needed():
    """Apply Alembic migrations automatically in production if enabled.

    Controlled by env var AUTO_APPLY_MIGRATIONS (default: on). Safe to run repeatedly.
    """
    if settings.env.lower() != "prod":
        return
    if not settings.auto_apply_migrations:
        return
    from alembic import command
    from alembic.config import Config
    root = Path(__file__).resolve().parents[1]
    alembic_ini = root / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # Ensure script_location resolves correctly when launched from arbitrary CWD
    cfg.set_main_option("script_location", str(root / "alembic"))
    logger.info("Applying Alembic migrations -> head ...")
    try:
        command.upgrade(cfg, "head")
    except Exception:  # pragma: no cover
        # Keep serving; /banners/active degrades to [] until the schema exists.
        logger.exception("Migration failed")
        return
    logger.info("Migrations applied successfully")

app = FastAPI(title=settings.app_name, version="0.1.0")

# Configurable CORS origins (CORS_ORIGINS env). If empty -> dev defaults.
origins = settings.cors_origins
logger.info("Resolved CORS origins: %s", origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(BannerError)
async def banner_error_handler(request: Request, exc: BannerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

# Malformed bodies/params are client errors like any other validation failure
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

app.include_router(api_router)

@app.on_event("startup")
def startup():
    # Seed only after migrations have been applied.
    _run_migrations_if_needed()
    if settings.env.lower() in {"dev", "development"}:
        # Local convenience: migrations are only applied automatically in prod
        create_tables()
        seed_demo_data()
