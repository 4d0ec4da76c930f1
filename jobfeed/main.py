"""FastAPI application entrypoint for jobfeed."""
import asyncio
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

# Load environment variables from .env file
load_dotenv()

from .config.config import load_app_config  # noqa: E402
from .infrastructure.store.entity_store import get_entity_store  # noqa: E402
from .infrastructure.workers.poll_loop import build_poll_loop  # noqa: E402
from .infrastructure.workers.sweeper import ExpirySweeper  # noqa: E402
from .presentation.dtos.errors import create_internal_error_response, create_validation_error_response  # noqa: E402
from .presentation.routers.server_entry_router import router as server_entry_router  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Reduce urllib3 logging to WARNING to reduce noise
logging.getLogger('urllib3').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def _log_routes(app: FastAPI) -> None:
    routes = [r.path for r in app.routes if hasattr(r, 'path')]
    logger.info(f"Registered {len(routes)} routes:")
    for route in sorted(routes):
        logger.info(f"  {route}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the poll loop and expiry sweeper for the lifetime of the app."""
    config = load_app_config()
    store = get_entity_store()
    tasks = []

    sweeper = ExpirySweeper(store, config.expiry_seconds, config.sweep_interval_seconds)
    tasks.append(asyncio.create_task(sweeper.run(), name="expiry-sweeper"))
    app.state.expiry_seconds = config.expiry_seconds
    app.state.sweeper = sweeper
    app.state.poll_loop = None

    if config.polling_enabled:
        poll_loop = build_poll_loop(config, store)
        tasks.append(asyncio.create_task(poll_loop.run(), name="poll-loop"))
        app.state.poll_loop = poll_loop
    else:
        logger.warning("DISCORD_TOKEN or CHANNEL_ID not set; message polling disabled")

    logger.info(f"jobfeed started (port={config.port}, expiry={config.expiry_seconds}s)")
    _log_routes(app)
    try:
        yield
    finally:
        if app.state.poll_loop is not None:
            app.state.poll_loop.stop()
        sweeper.stop()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Background tasks stopped")


app = FastAPI(title="jobfeed", lifespan=lifespan)

app.include_router(server_entry_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body validation errors."""
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    return create_validation_error_response(exc.errors())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected error: {exc}")
    return create_internal_error_response()
