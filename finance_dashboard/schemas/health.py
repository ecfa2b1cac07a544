from typing import Literal

from finance_dashboard.models.enums import DashboardStatus
from finance_dashboard.schemas.base import BaseSchema


class HealthSchema(BaseSchema):
    status: Literal["ok", "error"]
    dashboard: DashboardStatus
