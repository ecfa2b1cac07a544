from decimal import Decimal

from finance_dashboard.schemas.transactions import DraftTransactionSchema
from finance_dashboard.services.formatting import parse_amount

NOTES_MAX_LENGTH = 500
# NUMERIC(10, 2) on the server
AMOUNT_MAX = Decimal("99999999.99")

DESCRIPTION_REQUIRED = "Description is required"
AMOUNT_NOT_POSITIVE = "Amount must be positive"
AMOUNT_TOO_LARGE = "Amount must be at most 99,999,999.99"
DATE_REQUIRED = "Date is required"
CATEGORY_REQUIRED = "Category is required"
INSTALLMENTS_NOT_POSITIVE = "Number of installments must be greater than zero"
INSTALLMENT_OUT_OF_RANGE = (
    "Current installment must be between 1 and the number of installments"
)
NOTES_TOO_LONG = f"Notes must be at most {NOTES_MAX_LENGTH} characters"


def validate_draft(draft: DraftTransactionSchema) -> list[str]:
    """Check a draft before it is sent to the API.

    Every rule is evaluated so the user sees all problems at once, and the
    messages always come back in the same order.
    """
    violations: list[str] = []

    if not draft.description.strip():
        violations.append(DESCRIPTION_REQUIRED)

    amount = parse_amount(draft.amount)
    if amount is None or amount <= 0:
        violations.append(AMOUNT_NOT_POSITIVE)
    elif amount > AMOUNT_MAX:
        violations.append(AMOUNT_TOO_LARGE)

    if draft.date is None:
        violations.append(DATE_REQUIRED)

    if draft.category_id is None:
        violations.append(CATEGORY_REQUIRED)

    if draft.installment_count < 1:
        violations.append(INSTALLMENTS_NOT_POSITIVE)
    elif not 1 <= draft.installment_index <= draft.installment_count:
        violations.append(INSTALLMENT_OUT_OF_RANGE)

    if len(draft.notes) > NOTES_MAX_LENGTH:
        violations.append(NOTES_TOO_LONG)

    return violations
