# jobboard/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from jobboard.config import (
    ALLOWED_ORIGINS, AUTO_MIGRATE, ENV, FALLBACK_JOBS_PATH, IS_DEV, MAX_LIMIT,
    PAGE_SIZE, RECOMMENDER_TIMEOUT_SECS, RECOMMENDER_URL, STATS_TOP_N,
)

# -----------
# Logging
# -----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("jobboard")

from jobboard.database import Base, SessionLocal, engine  # noqa: E402
from jobboard import models  # noqa: F401,E402
from jobboard.routes import jobs  # noqa: E402
from jobboard.services.dataset import load_fallback_dataset  # noqa: E402
from jobboard.services.job_query import JobQueryService  # noqa: E402
from jobboard.services.search_tracker import HttpSearchTracker, NullSearchTracker  # noqa: E402
from jobboard.services.store_query import StoreJobBackend  # noqa: E402


def _log_routes(app: FastAPI) -> None:
    log.info("=== ROUTES ===")
    for r in app.routes:
        if isinstance(r, APIRoute):
            methods = ",".join(sorted(r.methods))
            log.info("%-10s %-35s -> %s.%s", methods, r.path, r.endpoint.__module__, r.endpoint.__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # DB metadata (DEV ONLY: auto-create tables; otherwise run alembic)
    if IS_DEV or AUTO_MIGRATE:
        try:
            Base.metadata.create_all(bind=engine)
        except Exception as e:
            # store down at boot: keep serving from the fallback dataset
            log.warning("create_all skipped, structured store unavailable: %s", e)

    # Loaded once; read-only for the life of the process
    dataset = load_fallback_dataset(FALLBACK_JOBS_PATH)

    app.state.job_query = JobQueryService(
        StoreJobBackend(SessionLocal),
        dataset,
        default_limit=PAGE_SIZE,
        max_limit=MAX_LIMIT,
        stats_top_n=STATS_TOP_N,
        expose_errors=IS_DEV,
    )
    app.state.search_tracker = (
        HttpSearchTracker(RECOMMENDER_URL, timeout=RECOMMENDER_TIMEOUT_SECS)
        if RECOMMENDER_URL else NullSearchTracker()
    )
    log.info("ENV=%s fallback_jobs=%d recommender=%s", ENV, len(dataset), RECOMMENDER_URL or "-")
    _log_routes(app)
    yield


app = FastAPI(
    title="JobBoard API",
    version="1.0.0",
    description="Job listing search with structured-store and fallback-dataset backends",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,          # must be explicit when credentials=True
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],                    # includes Authorization
    max_age=600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    auth_present = bool(request.headers.get("authorization"))
    log.info("REQ %s %s  Auth? %s", request.method, request.url.path, auth_present)
    return await call_next(request)


app.include_router(jobs.router, prefix="/api/v1")


# -----------
# Health & root
# -----------
@app.get("/health")
def health(request: Request):
    service = getattr(request.app.state, "job_query", None)
    return {
        "status": "ok",
        "env": ENV,
        "fallback_jobs": len(service.dataset) if service else 0,
    }


@app.get("/")
def root():
    return {"name": "JobBoard API", "version": "1.0.0"}
