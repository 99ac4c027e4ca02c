from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from barometer.repositories import ObservationRepository
from barometer.routers.observations import router as observations_router
from barometer.settings import SEED_DATA_PATH
from barometer.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging
log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load the seed observations once at startup.
    A broken seed file doesn't stop the service: it serves nothing (204)
    and /healthz reports the load error.
    """
    app.state.load_error = None
    try:
        app.state.repository = ObservationRepository.from_file(SEED_DATA_PATH)
    except (OSError, ValueError) as e:
        log.exception("could not load seed observations from %s", SEED_DATA_PATH)
        app.state.repository = ObservationRepository([])
        app.state.load_error = str(e)
    yield

# Create the FastAPI app instance
app = FastAPI(title="Barometer observations", lifespan=lifespan)

# Dashboards are served from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Simple health probe for monitoring.
    Returns:
      - ok: static True if the app is alive
      - observations: number of records being served
      - load_error: seed loading error message (None if healthy)
    """
    repo = getattr(app.state, "repository", None)
    return {
        "ok": True,
        "service": "barometer",
        "observations": repo.count() if repo is not None else 0,
        "load_error": getattr(app.state, "load_error", None),
    }

# Register API routers:
app.include_router(observations_router)
