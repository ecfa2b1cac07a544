from pydantic import ConfigDict

from finance_dashboard.schemas.base import BaseSchema


class FinancialSummarySchema(BaseSchema):
    model_config = ConfigDict(frozen=True)

    total_expenses: str = "0.00"
    total_income: str = "0.00"
    balance: str = "0.00"
