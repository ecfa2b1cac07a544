import contextlib
import logging

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI

from finance_dashboard.deps import create_container
from finance_dashboard.routes import router as api_router
from finance_dashboard.services.dashboard import DashboardController
from finance_dashboard.services.exception_handler import register_exception_handlers

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    container: AsyncContainer = app.state.dishka_container
    controller = await container.get(DashboardController)
    state = await controller.load()
    logger.info("Initial dashboard load finished with status %s", state.status)
    yield
    await container.close()


def create_app(
    container: AsyncContainer | None = None, title: str = "Finance Dashboard"
) -> FastAPI:
    container = container or create_container()
    app = FastAPI(lifespan=lifespan, title=title)
    register_exception_handlers(app)
    setup_dishka(container, app=app)
    app.include_router(api_router)
    return app
