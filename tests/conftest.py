import datetime

import pytest

from finance_dashboard.models.enums import TransactionKind
from finance_dashboard.schemas.transactions import DraftTransactionSchema
from finance_dashboard.services.dashboard import DashboardController
from tests.fakes import FakeApi


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def controller(api: FakeApi) -> DashboardController:
    return api.controller()


@pytest.fixture
def valid_draft() -> DraftTransactionSchema:
    return DraftTransactionSchema(
        description="Salary",
        amount="1500.00",
        date=datetime.date(2024, 1, 5),
        kind=TransactionKind.INCOME,
        installment_count=1,
        category_id=3,
    )
