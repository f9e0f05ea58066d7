from collections import defaultdict, deque
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import time

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.api.routes import api_router
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services.seed import seed_demo_data


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

settings = get_settings()
logger = logging.getLogger("livelihood.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
    if settings.seed_demo_data:
        with SessionLocal() as db:
            try:
                seed_demo_data(db)
            except Exception:
                db.rollback()
                logger.exception("Demo seed failed; starting with the existing data.")
    logger.info("%s ready (prefix %s).", settings.app_name, settings.api_prefix)
    yield
    engine.dispose()
    logger.info("%s stopped.", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_request_windows: dict[str, deque[float]] = defaultdict(deque)
RATE_LIMIT_SWEEP_SIZE = 1024


def _drop_idle_windows(now: float) -> None:
    idle = [
        key
        for key, window in _request_windows.items()
        if not window or now - window[-1] > settings.rate_limit_window_seconds
    ]
    for key in idle:
        del _request_windows[key]


def _over_limit(key: str, now: float) -> bool:
    if len(_request_windows) >= RATE_LIMIT_SWEEP_SIZE:
        _drop_idle_windows(now)
    window = _request_windows[key]
    while window and now - window[0] > settings.rate_limit_window_seconds:
        window.popleft()
    if len(window) >= settings.rate_limit_requests:
        return True
    window.append(now)
    return False


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.monotonic()
    client = request.client.host if request.client else "unknown"
    if _over_limit(f"{client}:{request.url.path}", time.time()):
        logger.warning("Rate limit hit by %s on %s", client, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"detail": "Too many requests. Please slow down and retry."},
        )

    try:
        response = await call_next(request)
    except Exception as exc:  # pragma: no cover
        logger.exception("Unhandled error for %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    elapsed_ms = (time.monotonic() - started) * 1000
    response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
    logger.info("%s %s -> %s %.2fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "The change conflicts with existing data."},
    )


@app.get("/healthz")
def healthz() -> dict:
    return {
        "ok": True,
        "service": settings.app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/", include_in_schema=False)
def root() -> dict[str, str]:
    return {
        "service": settings.app_name,
        "health": "/healthz",
        "api_health": f"{settings.api_prefix}/health",
        "docs": "/docs",
    }


@app.get("/favicon.ico", include_in_schema=False)
def favicon() -> Response:
    return Response(status_code=204)


app.include_router(api_router, prefix=settings.api_prefix)
