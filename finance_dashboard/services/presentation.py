from typing import TYPE_CHECKING

from finance_dashboard.schemas.dashboard import (
    CategoryOptionSchema,
    DashboardViewSchema,
    SummaryCardSchema,
    SummaryCardsSchema,
    TransactionRowSchema,
)
from finance_dashboard.schemas.transactions import TransactionSchema
from finance_dashboard.services.formatting import MonetaryFormatter
from finance_dashboard.settings.display import DisplaySettings

if TYPE_CHECKING:
    from finance_dashboard.services.dashboard.state import DashboardState


class DashboardPresenter:
    """Builds the JSON view-model of a dashboard snapshot."""

    def __init__(self, formatter: MonetaryFormatter, settings: DisplaySettings):
        self.formatter = formatter
        self.recent_limit = settings.recent_limit

    def _card(self, amount: str, color_class: str) -> SummaryCardSchema:
        return SummaryCardSchema(
            amount=amount,
            display=self.formatter.format_currency(amount),
            color_class=color_class,
        )

    def _row(
        self, transaction: TransactionSchema, category_names: dict[int, str]
    ) -> TransactionRowSchema:
        style = self.formatter.classify(transaction.kind)
        amount = self.formatter.format_currency(transaction.amount)
        if amount != self.formatter.placeholder:
            amount = f"{style.sign}{amount}"
        monthly = None
        if transaction.installment_count > 1:
            monthly = self.formatter.format_currency(transaction.monthly_amount)
        return TransactionRowSchema(
            id=transaction.id,
            date=transaction.date,
            display_date=self.formatter.format_date(transaction.date),
            description=transaction.description,
            category=category_names.get(transaction.category_id, ""),
            amount=amount,
            color_class=style.color_class,
            kind=transaction.kind,
            monthly_amount=monthly,
        )

    def __call__(self, state: "DashboardState") -> DashboardViewSchema:
        summary = state.summary
        category_names = {category.id: category.name for category in state.categories}
        return DashboardViewSchema(
            status=state.status,
            error=state.error,
            violations=list(state.violations),
            submitting=state.submitting,
            draft=state.draft,
            summary=SummaryCardsSchema(
                income=self._card(summary.total_income, "positive"),
                expenses=self._card(summary.total_expenses, "negative"),
                balance=self._card(
                    summary.balance,
                    self.formatter.classify_balance(summary.balance),
                ),
            ),
            transactions=[
                self._row(transaction, category_names)
                for transaction in state.transactions[: self.recent_limit]
            ],
            categories=[
                CategoryOptionSchema(
                    id=category.id,
                    label=f"{category.name} ({category.kind})",
                    essential=category.essential,
                )
                for category in state.categories
            ],
        )
