from typing import AsyncIterable

import httpx
from dishka import Provider, Scope, provide

from finance_dashboard.services.providers.http_api import (
    HttpCategoryReader,
    HttpSummaryReader,
    HttpTransactionReader,
    HttpTransactionWriter,
)
from finance_dashboard.services.providers.protocols.categories import ICategoryReader
from finance_dashboard.services.providers.protocols.summary import ISummaryReader
from finance_dashboard.services.providers.protocols.transactions import (
    ITransactionReader,
    ITransactionWriter,
)
from finance_dashboard.settings.api import ApiSettings


class TransactionApiProvider(Provider):
    scope = Scope.APP

    categories = provide(HttpCategoryReader, provides=ICategoryReader)
    transactions = provide(HttpTransactionReader, provides=ITransactionReader)
    writer = provide(HttpTransactionWriter, provides=ITransactionWriter)
    summary = provide(HttpSummaryReader, provides=ISummaryReader)

    @provide
    async def get_client(
        self, settings: ApiSettings
    ) -> AsyncIterable[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            base_url=str(settings.base_url),
            timeout=settings.timeout,
        ) as client:
            yield client
