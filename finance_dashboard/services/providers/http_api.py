import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from finance_dashboard.schemas.categories import CategorySchema
from finance_dashboard.schemas.transactions import (
    DraftTransactionSchema,
    TransactionSchema,
)
from finance_dashboard.services.errors import (
    ForbiddenError,
    MissingReferenceError,
    RemoteValidationError,
    ServerError,
    TransportError,
    UnknownTransportError,
)
from finance_dashboard.services.providers.protocols.categories import ICategoryReader
from finance_dashboard.services.providers.protocols.summary import ISummaryReader
from finance_dashboard.services.providers.protocols.transactions import (
    ITransactionReader,
    ITransactionWriter,
)

logger = logging.getLogger(__name__)

CATEGORIES_PATH = "/api/categories"
TRANSACTIONS_PATH = "/api/transactions"
SUMMARY_PATH = "/api/transactions/summary"

STATUS_ERRORS: dict[int, type[TransportError]] = {
    400: RemoteValidationError,
    403: ForbiddenError,
    404: MissingReferenceError,
}


def error_for_status(status_code: int) -> TransportError:
    if status_code in STATUS_ERRORS:
        return STATUS_ERRORS[status_code](status_code=status_code)
    if status_code >= 500:
        return ServerError(status_code=status_code)
    return UnknownTransportError(status_code=status_code)


async def request_json(
    client: httpx.AsyncClient, method: str, path: str, **kwargs: Any
) -> Any:
    try:
        response = await client.request(method, path, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise UnknownTransportError() from exc
    if response.is_error:
        logger.warning("%s %s returned %s", method, path, response.status_code)
        raise error_for_status(response.status_code)
    try:
        return response.json(parse_float=Decimal)
    except ValueError as exc:
        logger.warning("%s %s returned a body that is not JSON", method, path)
        raise UnknownTransportError() from exc


def _parse[T](adapter: TypeAdapter[T], payload: Any, path: str) -> T:
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        logger.warning("Unexpected payload from %s: %s", path, exc)
        raise UnknownTransportError() from exc


class HttpCategoryReader(ICategoryReader):
    adapter = TypeAdapter(list[CategorySchema])

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def list_all(self) -> list[CategorySchema]:
        payload = await request_json(self.client, "GET", CATEGORIES_PATH)
        return _parse(self.adapter, payload, CATEGORIES_PATH)


class HttpTransactionReader(ITransactionReader):
    adapter = TypeAdapter(list[TransactionSchema])

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def list_all(self) -> list[TransactionSchema]:
        payload = await request_json(self.client, "GET", TRANSACTIONS_PATH)
        return _parse(self.adapter, payload, TRANSACTIONS_PATH)


class HttpTransactionWriter(ITransactionWriter):
    adapter = TypeAdapter(TransactionSchema)

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def create(self, draft: DraftTransactionSchema) -> TransactionSchema:
        payload = await request_json(
            self.client,
            "POST",
            TRANSACTIONS_PATH,
            json=draft.model_dump(mode="json", by_alias=True),
        )
        transaction = _parse(self.adapter, payload, TRANSACTIONS_PATH)
        logger.info("Transaction %s created", transaction.id)
        return transaction


class HttpSummaryReader(ISummaryReader):
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _total(self, name: str) -> str:
        path = f"{SUMMARY_PATH}/{name}"
        payload = await request_json(self.client, "GET", path)
        if isinstance(payload, bool) or not isinstance(payload, (str, int, Decimal)):
            logger.warning("Unexpected total from %s: %r", path, payload)
            raise UnknownTransportError()
        return str(payload)

    async def total_expenses(self) -> str:
        return await self._total("expenses")

    async def total_income(self) -> str:
        return await self._total("income")

    async def balance(self) -> str:
        return await self._total("balance")
