# fau_portal/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fau_portal.api.v1.api import api_router
from fau_portal.api.v1.endpoints import health
from fau_portal.core.config import settings
from fau_portal.core.exceptions import PortalError
from fau_portal.core.limiter import limiter
from fau_portal.scheduler import init_scheduler, shutdown_scheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# This function will run once when the application starts up.
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    # Refuse to serve traffic with an insecure configuration
    settings.validate_for_startup()
    if settings.SCHEDULER_ENABLED:
        init_scheduler()
    else:
        logger.info("Scheduler disabled by configuration")
    yield
    shutdown_scheduler()
    logger.info("Application shutting down...")


app = FastAPI(
    title="FAU Erdal Barnehage Portal",
    version="1.0.0",
    description="""
        Backend for the FAU Erdal Barnehage parent-council website.

        ## Features

        * **Events**: Public event calendar, managed by the council
        * **Registrations**: Capacity-checked sign-up with email confirmation
        * **Reminders**: Automatic reminder emails the day before each event
        * **Contact**: Contact form and inbox, including anonymous messages
        * **Board members**: Public list of the council board

        ## Authentication

        Log in at `/api/auth/login`. Browsers use the `session` cookie and must
        echo the `csrf-token` cookie in the `X-CSRF-Token` header on every
        state-changing request. Other clients may send
        `Authorization: Bearer <token>` instead.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("Unhandled portal error on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.error_code, **exc.details},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,  # Allow specific origins
    allow_credentials=True,  # Allow cookies and authorization headers
    allow_methods=["*"],  # Allow all methods (GET, POST, etc.)
    allow_headers=["*"],  # Allow all headers
)

app.include_router(api_router, prefix="/api")
app.include_router(health.router)


@app.get("/")
def read_root():
    return {"status": "FAU portal is running"}
