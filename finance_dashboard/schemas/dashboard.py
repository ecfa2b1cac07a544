import datetime

from finance_dashboard.models.enums import DashboardStatus, TransactionKind
from finance_dashboard.schemas.base import BaseSchema
from finance_dashboard.schemas.transactions import DraftTransactionSchema


class SummaryCardSchema(BaseSchema):
    amount: str
    display: str
    color_class: str


class SummaryCardsSchema(BaseSchema):
    income: SummaryCardSchema
    expenses: SummaryCardSchema
    balance: SummaryCardSchema


class TransactionRowSchema(BaseSchema):
    id: int
    date: datetime.date
    display_date: str
    description: str
    category: str
    amount: str
    color_class: str
    kind: TransactionKind
    monthly_amount: str | None = None


class CategoryOptionSchema(BaseSchema):
    id: int
    label: str
    essential: bool = False


class DashboardViewSchema(BaseSchema):
    status: DashboardStatus
    error: str | None = None
    violations: list[str] = []
    submitting: bool = False
    draft: DraftTransactionSchema | None = None
    summary: SummaryCardsSchema
    transactions: list[TransactionRowSchema] = []
    categories: list[CategoryOptionSchema] = []
