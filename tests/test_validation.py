import datetime

import pytest

from finance_dashboard.models.enums import TransactionKind
from finance_dashboard.schemas.transactions import DraftTransactionSchema
from finance_dashboard.services.validation import (
    AMOUNT_NOT_POSITIVE,
    AMOUNT_TOO_LARGE,
    CATEGORY_REQUIRED,
    DATE_REQUIRED,
    DESCRIPTION_REQUIRED,
    INSTALLMENT_OUT_OF_RANGE,
    INSTALLMENTS_NOT_POSITIVE,
    NOTES_TOO_LONG,
    validate_draft,
)


def test_valid_draft_has_no_violations(valid_draft):
    assert validate_draft(valid_draft) == []


def test_all_rules_reported_in_fixed_order():
    draft = DraftTransactionSchema.model_validate(
        {
            "description": "",
            "amount": "-5",
            "date": "",
            "kind": "Expense",
            "installmentCount": 0,
            "categoryId": 0,
        }
    )
    assert validate_draft(draft) == [
        DESCRIPTION_REQUIRED,
        AMOUNT_NOT_POSITIVE,
        DATE_REQUIRED,
        CATEGORY_REQUIRED,
        INSTALLMENTS_NOT_POSITIVE,
    ]


@pytest.mark.parametrize("description", ["", " ", "\t\n  "])
def test_blank_description_is_reported(valid_draft, description):
    draft = valid_draft.model_copy(update={"description": description})
    assert validate_draft(draft) == [DESCRIPTION_REQUIRED]


@pytest.mark.parametrize(
    "amount", ["", "0", "0.00", "-0.01", "-5", "abc", "12abc", "NaN", "Infinity"]
)
def test_invalid_amount_is_reported(valid_draft, amount):
    draft = valid_draft.model_copy(update={"amount": amount})
    assert AMOUNT_NOT_POSITIVE in validate_draft(draft)


@pytest.mark.parametrize(
    "amount", ["0.01", "1", " 42.5 ", "1500.00", "1e3", "99999999.99"]
)
def test_positive_amount_is_accepted(valid_draft, amount):
    draft = valid_draft.model_copy(update={"amount": amount})
    assert validate_draft(draft) == []


@pytest.mark.parametrize("amount", ["100000000", "99999999.999", "1e30"])
def test_amount_above_column_limit_is_reported(valid_draft, amount):
    draft = valid_draft.model_copy(update={"amount": amount})
    assert validate_draft(draft) == [AMOUNT_TOO_LARGE]


def test_missing_date_and_category(valid_draft):
    draft = valid_draft.model_copy(update={"date": None, "category_id": None})
    assert validate_draft(draft) == [DATE_REQUIRED, CATEGORY_REQUIRED]


def test_installment_index_beyond_count(valid_draft):
    draft = valid_draft.model_copy(
        update={"installment_count": 3, "installment_index": 4}
    )
    assert validate_draft(draft) == [INSTALLMENT_OUT_OF_RANGE]


def test_installment_index_not_checked_without_installments(valid_draft):
    draft = valid_draft.model_copy(
        update={"installment_count": 0, "installment_index": 5}
    )
    assert validate_draft(draft) == [INSTALLMENTS_NOT_POSITIVE]


def test_notes_length(valid_draft):
    assert validate_draft(valid_draft.model_copy(update={"notes": "x" * 500})) == []
    draft = valid_draft.model_copy(update={"notes": "x" * 501})
    assert validate_draft(draft) == [NOTES_TOO_LONG]


def test_validation_does_not_modify_draft(valid_draft):
    before = valid_draft.model_dump()
    validate_draft(valid_draft)
    assert valid_draft.model_dump() == before


def test_new_draft_defaults():
    draft = DraftTransactionSchema()
    assert draft.date == datetime.date.today()
    assert draft.kind is TransactionKind.EXPENSE
    assert draft.category_id is None
    assert validate_draft(draft) == [
        DESCRIPTION_REQUIRED,
        AMOUNT_NOT_POSITIVE,
        CATEGORY_REQUIRED,
    ]
