import datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from annotated_types import Ge, MinLen
from pydantic import (
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from finance_dashboard.models.enums import TransactionKind
from finance_dashboard.schemas.base import BaseSchema
from finance_dashboard.services import formatting


def _amount_as_text(v: Any) -> Any:
    if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
        return str(v)
    return v


class TransactionSchema(BaseSchema):
    model_config = ConfigDict(frozen=True)

    id: int
    description: Annotated[str, MinLen(min_length=1)]
    amount: str
    date: datetime.date
    kind: TransactionKind
    recurring: bool = False
    installment_count: Annotated[int, Ge(ge=1)] = 1
    installment_index: Annotated[int, Ge(ge=1)] = 1
    category_id: int
    notes: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any):
        return _amount_as_text(v)

    @model_validator(mode="after")
    def validate_installments(self):
        if self.installment_index > self.installment_count:
            raise ValueError("installment_index must not exceed installment_count")
        return self

    @computed_field
    @property
    def monthly_amount(self) -> str:
        amount = formatting.parse_amount(self.amount)
        if amount is None:
            return self.amount
        try:
            return str(formatting.monthly_amount(amount, self.installment_count))
        except InvalidOperation:
            return self.amount


class DraftTransactionSchema(BaseSchema):
    """A transaction being edited; nothing here is validated beyond types."""

    description: str = ""
    amount: str = ""
    date: datetime.date | None = Field(default_factory=datetime.date.today)
    kind: TransactionKind = TransactionKind.EXPENSE
    recurring: bool = False
    installment_count: int = 1
    installment_index: int = 1
    category_id: int | None = None
    notes: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any):
        return _amount_as_text(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("category_id", mode="before")
    @classmethod
    def validate_category_id(cls, v: Any):
        # 0 and "" both mean "nothing selected" in older clients
        if v == "" or (isinstance(v, int) and not isinstance(v, bool) and v == 0):
            return None
        return v


class DraftChangesSchema(BaseSchema):
    description: str | None = None
    amount: str | None = None
    date: datetime.date | str | None = None
    kind: TransactionKind | None = None
    recurring: bool | None = None
    installment_count: int | None = None
    installment_index: int | None = None
    category_id: int | str | None = None
    notes: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any):
        return _amount_as_text(v)
