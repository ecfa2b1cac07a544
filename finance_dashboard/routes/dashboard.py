from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter

from finance_dashboard.schemas.dashboard import DashboardViewSchema
from finance_dashboard.schemas.transactions import DraftChangesSchema
from finance_dashboard.services.dashboard import DashboardController
from finance_dashboard.services.presentation import DashboardPresenter

router = APIRouter(prefix="/dashboard", tags=["dashboard"], route_class=DishkaRoute)


@router.get("")
async def get_dashboard(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(controller.state)


@router.post("/reload")
async def reload_dashboard(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(await controller.load())


@router.post("/draft")
async def open_draft(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
    data: DraftChangesSchema | None = None,
) -> DashboardViewSchema:
    fields = data.model_dump(exclude_unset=True) if data else {}
    return present(controller.open_draft(**fields))


@router.patch("/draft")
async def edit_draft(
    data: DraftChangesSchema,
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(controller.edit_draft(**data.model_dump(exclude_unset=True)))


@router.delete("/draft")
async def cancel_draft(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(controller.cancel_draft())


@router.post("/draft/submit")
async def submit_draft(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(await controller.submit())


@router.delete("/error")
async def dismiss_error(
    controller: FromDishka[DashboardController],
    present: FromDishka[DashboardPresenter],
) -> DashboardViewSchema:
    return present(controller.dismiss_error())
