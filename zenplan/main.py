"""ZenPlan HTTP service: schedules, checklists and the daily companion."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zenplan.core.config import settings
from zenplan.core.database import create_db_and_tables, get_store
from zenplan.core.scheduler import shutdown_scheduler, start_scheduler
from zenplan.routes import assistant, items, schedules

logger = logging.getLogger(__name__)


def configure_logging() -> Path:
    """Send all planner logs to ~/.logs/zenplan/latest.log."""
    log_file = Path.home() / ".logs" / "zenplan" / "latest.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
    )
    return log_file


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the schedule slot, then start the reminder jobs that read it."""
    create_db_and_tables()
    store = get_store()
    logger.info(f"ZenPlan ready with {len(store.schedules)} schedules")
    start_scheduler()
    yield
    shutdown_scheduler()
    logger.info("ZenPlan stopped")


app = FastAPI(
    title=settings.app_name,
    description="Plan dated objectives, tick off their checklists and get a daily focus summary",
    version="0.1.0",
    lifespan=lifespan,
)

# The display layer may be served from anywhere listed in ALLOWED_ORIGINS
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (schedules, items, assistant):
    app.include_router(module.router)


@app.get("/health")
async def health():
    """Liveness check for the planner service."""
    return {"status": "healthy", "app": settings.app_name}
