import asyncio
import logging

from finance_dashboard.schemas.summary import FinancialSummarySchema
from finance_dashboard.services.errors import primary_failure
from finance_dashboard.services.providers.protocols.summary import ISummaryReader

logger = logging.getLogger(__name__)


def combine(
    expense_total: str, income_total: str, balance: str
) -> FinancialSummarySchema:
    # balance comes from the API as is; it is not recomputed here
    return FinancialSummarySchema(
        total_expenses=expense_total,
        total_income=income_total,
        balance=balance,
    )


async def load_summary(reader: ISummaryReader) -> FinancialSummarySchema:
    """Fetch the three totals concurrently; any failure abandons all of them."""
    try:
        async with asyncio.TaskGroup() as group:
            expenses = group.create_task(reader.total_expenses())
            income = group.create_task(reader.total_income())
            balance = group.create_task(reader.balance())
    except ExceptionGroup as errors:
        logger.debug("Summary fetch abandoned: %s", errors.exceptions)
        raise primary_failure(errors.exceptions)
    return combine(expenses.result(), income.result(), balance.result())
