from typing import Protocol

from finance_dashboard.schemas.categories import CategorySchema


class ICategoryReader(Protocol):
    async def list_all(self) -> list[CategorySchema]: ...
