"""
Director Relay - FastAPI application entry point.
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from . import __version__
from .config import get_config, set_config, RelayConfig
from .errors import RelayError
from .utils import get_host_ip
from .api import (
    auth_router,
    director_router,
    discover_router,
    health_router,
    require_basic_auth,
    static_router,
)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    config = get_config()

    # Add file handler if configured
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Logging to file: {config.log_file}")

    scheme = "https" if config.tls_enabled else "http"
    logger.info("=" * 60)
    logger.info(f"Director Relay v{__version__}")
    logger.info("=" * 60)
    logger.info(f"Listening on {scheme}://{config.host}:{config.port}")
    logger.info(f"LAN address: {get_host_ip()}")
    logger.info(f"SDDP: {config.sddp_address}:{config.sddp_port} ({config.discovery_window}s window)")
    logger.info(f"Basic auth: {'enabled' if config.auth_enabled else 'disabled'}")
    logger.info("=" * 60)

    yield

    logger.info("Director Relay stopped")


# FastAPI app with lifespan
app = FastAPI(
    title="Director Relay",
    description="Local relay between a browser control panel and director controllers",
    version=__version__,
    lifespan=lifespan,
    dependencies=[Depends(require_basic_auth)],
)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Register routers with /api prefix; the static catch-all goes last
app.include_router(discover_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(director_router, prefix="/api")
app.include_router(health_router)
app.include_router(static_router)


def main():
    """Run Director Relay."""
    defaults = RelayConfig.from_env()

    parser = argparse.ArgumentParser(description="Director Relay")
    parser.add_argument(
        "--port",
        type=int,
        default=defaults.port,
        help=f"Port to run the relay on (default: {defaults.port})"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )
    parser.add_argument(
        "--static-dir",
        type=str,
        default=defaults.static_dir,
        help=f"Directory holding the web UI (default: {defaults.static_dir})"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level,
        help=f"Logging level (default: {defaults.log_level})"
    )

    args = parser.parse_args()

    # Update configuration
    defaults.host = args.host
    defaults.port = args.port
    defaults.static_dir = args.static_dir
    defaults.log_level = args.log_level
    set_config(defaults)

    # Set log level
    logging.getLogger().setLevel(getattr(logging, args.log_level))

    logger.info(f"Starting Director Relay on {args.host}:{args.port}")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        ssl_certfile=defaults.ssl_certfile if defaults.tls_enabled else None,
        ssl_keyfile=defaults.ssl_keyfile if defaults.tls_enabled else None,
    )


if __name__ == "__main__":
    main()
