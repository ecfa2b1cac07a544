from typing import Annotated

from annotated_types import Ge, MinLen
from pydantic import ConfigDict

from finance_dashboard.models.enums import CategoryKind
from finance_dashboard.schemas.base import BaseSchema


class CategorySchema(BaseSchema):
    model_config = ConfigDict(frozen=True)

    id: Annotated[int, Ge(ge=1)]
    name: Annotated[str, MinLen(min_length=1)]
    kind: CategoryKind
    essential: bool = False
