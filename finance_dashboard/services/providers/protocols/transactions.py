from typing import Protocol

from finance_dashboard.schemas.transactions import (
    DraftTransactionSchema,
    TransactionSchema,
)


class ITransactionReader(Protocol):
    async def list_all(self) -> list[TransactionSchema]: ...


class ITransactionWriter(Protocol):
    async def create(self, draft: DraftTransactionSchema) -> TransactionSchema: ...
