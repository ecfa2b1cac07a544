from dataclasses import dataclass, field, replace

from finance_dashboard.models.enums import DashboardStatus
from finance_dashboard.schemas.categories import CategorySchema
from finance_dashboard.schemas.summary import FinancialSummarySchema
from finance_dashboard.schemas.transactions import (
    DraftTransactionSchema,
    TransactionSchema,
)
from finance_dashboard.services.errors import InvalidTransitionError


@dataclass(frozen=True)
class Load:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    categories: tuple[CategorySchema, ...]
    transactions: tuple[TransactionSchema, ...]
    summary: FinancialSummarySchema


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class OpenDraft:
    draft: DraftTransactionSchema


@dataclass(frozen=True)
class EditDraft:
    draft: DraftTransactionSchema


@dataclass(frozen=True)
class SubmitDraft:
    violations: tuple[str, ...] = ()


@dataclass(frozen=True)
class SubmitSucceeded:
    transaction: TransactionSchema


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class CancelDraft:
    pass


@dataclass(frozen=True)
class DismissError:
    pass


type Action = (
    Load
    | LoadSucceeded
    | LoadFailed
    | OpenDraft
    | EditDraft
    | SubmitDraft
    | SubmitSucceeded
    | SubmitFailed
    | CancelDraft
    | DismissError
)


@dataclass(frozen=True)
class DashboardState:
    """Immutable snapshot of everything the dashboard shows.

    A new snapshot is produced by :meth:`apply` for each action; actions that
    make no sense in the current snapshot raise ``InvalidTransitionError``.
    """

    status: DashboardStatus = DashboardStatus.IDLE
    categories: tuple[CategorySchema, ...] = ()
    transactions: tuple[TransactionSchema, ...] = ()
    summary: FinancialSummarySchema = field(default_factory=FinancialSummarySchema)
    error: str | None = None
    violations: tuple[str, ...] = ()
    draft: DraftTransactionSchema | None = None
    submitting: bool = False

    def apply(self, action: Action) -> "DashboardState":
        match action:
            case Load():
                return replace(self, status=DashboardStatus.LOADING, error=None)
            case LoadSucceeded(categories, transactions, summary):
                self._require(DashboardStatus.LOADING, action)
                return replace(
                    self,
                    status=DashboardStatus.READY,
                    categories=categories,
                    transactions=transactions,
                    summary=summary,
                )
            case LoadFailed(message):
                self._require(DashboardStatus.LOADING, action)
                return replace(self, status=DashboardStatus.FAILED, error=message)
            case OpenDraft(draft):
                self._require(DashboardStatus.READY, action)
                if self.submitting:
                    raise self._invalid(action)
                return replace(self, draft=draft, violations=())
            case EditDraft(draft):
                if self.draft is None or self.submitting:
                    raise self._invalid(action)
                return replace(self, draft=draft)
            case SubmitDraft(violations):
                self._require(DashboardStatus.READY, action)
                if self.draft is None or self.submitting:
                    raise self._invalid(action)
                if violations:
                    return replace(
                        self, violations=violations, error="; ".join(violations)
                    )
                return replace(self, submitting=True, violations=(), error=None)
            case SubmitSucceeded():
                if not self.submitting:
                    raise self._invalid(action)
                return replace(self, submitting=False, draft=None, violations=())
            case SubmitFailed(message):
                if not self.submitting:
                    raise self._invalid(action)
                return replace(self, submitting=False, error=message)
            case CancelDraft():
                if self.draft is None or self.submitting:
                    raise self._invalid(action)
                return replace(self, draft=None, violations=())
            case DismissError():
                return replace(self, error=None)
        raise TypeError(f"Unknown dashboard action: {action!r}")

    def _require(self, status: DashboardStatus, action: Action) -> None:
        if self.status is not status:
            raise self._invalid(action)

    def _invalid(self, action: Action) -> InvalidTransitionError:
        return InvalidTransitionError(
            f"{type(action).__name__} is not allowed while the dashboard is "
            f"{self.status}"
        )
