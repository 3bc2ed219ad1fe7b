from fastapi import FastAPI
from contextlib import asynccontextmanager
import uvicorn
import logging

from .core.container import container, init_container
from .core.logger import configure_logging
from .api.errors import register_exception_handlers

logger = logging.getLogger(__name__)

# Settings come from TASKBOARD_* environment variables (see config.py)
init_container()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    configure_logging(
        level=container.config.logging.level() or "INFO",
        log_file=container.config.logging.file()
    )

    from .database import init_db
    init_db(container.engine())

    logger.info(f"[STARTUP] Backend: {container.config.api.base_url()}")

    # Restore a saved session (fail-closed: anything but "verified" logs out)
    session = container.session_service()
    state = await session.restore()
    logger.info(f"[STARTUP] Session state: {state.value}")

    yield

    # --- SHUTDOWN ---
    logger.info("[OK] Shutdown complete.")


app = FastAPI(title="Taskboard", lifespan=lifespan)
register_exception_handlers(app)

# ========== Include API Routers ==========
from .api.routers import auth, tasks, users, system

app.include_router(auth.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(system.router, prefix="/api")


def run():
    uvicorn.run("taskboard.main:app", host="127.0.0.1", port=8000, reload=False)


if __name__ == "__main__":
    run()
