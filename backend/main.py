from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from config.app_config import APP_CONFIG
from utils.logging_utils import configure_logging

# Configure logging before anything else logs
LOG_FILE = configure_logging(APP_CONFIG.log_dir, APP_CONFIG.log_level)
logger = logging.getLogger(__name__)
logger.info(f"Logging initialized: {LOG_FILE}")

from init_db import init_database
from api import cars, interventions, operations, contacts
from services.system_tray import SystemTrayLauncher

# Initialize database on startup
init_database()

_tray: SystemTrayLauncher | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - tray icon on startup, removal on shutdown"""
    global _tray

    if APP_CONFIG.tray_enabled:
        _tray = SystemTrayLauncher(APP_CONFIG.app_name, APP_CONFIG.base_url)
        _tray.start()
    else:
        logger.info("System tray disabled by configuration")

    logger.info(f"{APP_CONFIG.app_name} started on {APP_CONFIG.base_url}")

    yield

    if _tray is not None:
        _tray.stop()
        _tray = None
    logger.info("Application shutdown complete")


app = FastAPI(
    title=f"{APP_CONFIG.app_name} API",
    description="Car maintenance tracker: cars, interventions, operations and contacts",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(cars.router, prefix="/api", tags=["cars"])
app.include_router(interventions.router, prefix="/api", tags=["interventions"])
app.include_router(operations.router, prefix="/api", tags=["operations"])
app.include_router(contacts.router, prefix="/api", tags=["contacts"])


@app.get("/api/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": f"{APP_CONFIG.app_name} API",
        "version": "1.0.0"
    }


def get_frontend_path():
    """Get the path to the built web UI, if any"""
    frontend_path = Path(__file__).parent.parent / 'frontend' / 'build'

    if frontend_path.exists():
        logger.info(f"Frontend path found: {frontend_path}")
        return frontend_path
    logger.warning(f"Frontend path not found: {frontend_path}")
    return None


# Mount the web UI last so it never shadows /api routes
frontend_path = get_frontend_path()
if frontend_path:
    app.mount("/", StaticFiles(directory=str(frontend_path), html=True), name="frontend")
else:
    @app.get("/")
    def root():
        """Root endpoint - API only mode"""
        return {
            "message": f"{APP_CONFIG.app_name} API",
            "docs": "/docs",
            "health": "/api/health",
            "note": "Frontend not available - running in API-only mode"
        }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting {APP_CONFIG.app_name} on {APP_CONFIG.base_url}...")
    uvicorn.run(app, host=APP_CONFIG.server_address, port=APP_CONFIG.server_port)
