from typing import Protocol


class ISummaryReader(Protocol):
    async def total_expenses(self) -> str: ...

    async def total_income(self) -> str: ...

    async def balance(self) -> str: ...
