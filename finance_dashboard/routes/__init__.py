from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter

from finance_dashboard.models.enums import DashboardStatus
from finance_dashboard.routes.dashboard import router as dashboard_router
from finance_dashboard.schemas.health import HealthSchema
from finance_dashboard.services.dashboard import DashboardController

router = APIRouter(route_class=DishkaRoute)
router.include_router(dashboard_router)


@router.get("/health")
async def health(controller: FromDishka[DashboardController]) -> HealthSchema:
    status = controller.state.status
    return HealthSchema(
        status="error" if status is DashboardStatus.FAILED else "ok",
        dashboard=status,
    )
