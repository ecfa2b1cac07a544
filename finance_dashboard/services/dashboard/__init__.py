import asyncio
import logging
from collections.abc import Callable
from typing import Any

from dishka import Provider, Scope, provide

from finance_dashboard.models.enums import LoadPolicy
from finance_dashboard.schemas.transactions import DraftTransactionSchema
from finance_dashboard.services.dashboard.state import (
    Action,
    CancelDraft,
    DashboardState,
    DismissError,
    EditDraft,
    Load,
    LoadFailed,
    LoadSucceeded,
    OpenDraft,
    SubmitDraft,
    SubmitFailed,
    SubmitSucceeded,
)
from finance_dashboard.services.errors import (
    LOAD_FAILED_MESSAGE,
    SUBMIT_FAILED_MESSAGE,
    InvalidTransitionError,
    TransportError,
    describe_failure,
    primary_failure,
)
from finance_dashboard.services.formatting import MonetaryFormatter
from finance_dashboard.services.presentation import DashboardPresenter
from finance_dashboard.services.providers.protocols.categories import ICategoryReader
from finance_dashboard.services.providers.protocols.summary import ISummaryReader
from finance_dashboard.services.providers.protocols.transactions import (
    ITransactionReader,
    ITransactionWriter,
)
from finance_dashboard.services.summary import load_summary
from finance_dashboard.services.validation import validate_draft
from finance_dashboard.settings.app import AppSettings
from finance_dashboard.settings.display import DisplaySettings

logger = logging.getLogger(__name__)

type Listener = Callable[[DashboardState], Any]


def _log_failure(action: str, exc: BaseException) -> None:
    if isinstance(exc, TransportError):
        logger.warning(
            "Dashboard %s failed: %s (status=%s)", action, exc.detail, exc.status_code
        )
    else:
        logger.error("Unexpected error during dashboard %s", action, exc_info=exc)


class DashboardController:
    def __init__(
        self,
        categories: ICategoryReader,
        transactions: ITransactionReader,
        writer: ITransactionWriter,
        summary: ISummaryReader,
        settings: AppSettings,
    ):
        self.categories = categories
        self.transactions = transactions
        self.writer = writer
        self.summary = summary
        self.load_policy = settings.load_policy
        self._state = DashboardState()
        self._listeners: list[Listener] = []
        self._load_task: asyncio.Task[DashboardState] | None = None

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, action: Action) -> DashboardState:
        self._state = self._state.apply(action)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Dashboard listener %r failed", listener)
        return self._state

    async def load(self, policy: LoadPolicy | None = None) -> DashboardState:
        policy = policy or self.load_policy
        task = self._load_task
        if task is not None and not task.done():
            if policy is LoadPolicy.JOIN:
                logger.debug("Load already in flight, joining it")
                return await self._await_load(task)
            logger.info("Restarting the in-flight dashboard load")
            task.cancel()
        task = self._load_task = asyncio.create_task(self._load())
        return await self._await_load(task)

    async def _await_load(self, task: asyncio.Task[DashboardState]) -> DashboardState:
        while True:
            try:
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                if task is self._load_task:
                    raise
                # superseded by a newer load, wait for that one instead
                task = self._load_task

    async def _load(self) -> DashboardState:
        self._dispatch(Load())
        try:
            async with asyncio.TaskGroup() as group:
                categories = group.create_task(self.categories.list_all())
                transactions = group.create_task(self.transactions.list_all())
                summary = group.create_task(load_summary(self.summary))
        except ExceptionGroup as errors:
            exc = primary_failure(errors.exceptions)
            _log_failure("load", exc)
            return self._dispatch(
                LoadFailed(describe_failure(exc, LOAD_FAILED_MESSAGE))
            )
        logger.info(
            "Dashboard loaded: %s categories, %s transactions",
            len(categories.result()),
            len(transactions.result()),
        )
        return self._dispatch(
            LoadSucceeded(
                categories=tuple(categories.result()),
                transactions=tuple(transactions.result()),
                summary=summary.result(),
            )
        )

    def open_draft(self, **fields: Any) -> DashboardState:
        return self._dispatch(OpenDraft(DraftTransactionSchema.model_validate(fields)))

    def edit_draft(self, **changes: Any) -> DashboardState:
        draft = self._state.draft
        if draft is None:
            raise InvalidTransitionError("There is no transaction being edited")
        updated = DraftTransactionSchema.model_validate(
            {**draft.model_dump(), **changes}
        )
        return self._dispatch(EditDraft(updated))

    def cancel_draft(self) -> DashboardState:
        return self._dispatch(CancelDraft())

    def dismiss_error(self) -> DashboardState:
        return self._dispatch(DismissError())

    async def submit(self) -> DashboardState:
        draft = self._state.draft
        if draft is None:
            raise InvalidTransitionError("There is no transaction to submit")
        violations = tuple(validate_draft(draft))
        state = self._dispatch(SubmitDraft(violations))
        if violations:
            logger.info("Draft rejected with %s violation(s)", len(violations))
            return state
        try:
            transaction = await self.writer.create(draft)
        except asyncio.CancelledError:
            # outcome unknown; leave the draft editable and re-raise
            self._dispatch(SubmitFailed(SUBMIT_FAILED_MESSAGE))
            raise
        except Exception as exc:
            _log_failure("submit", exc)
            return self._dispatch(
                SubmitFailed(describe_failure(exc, SUBMIT_FAILED_MESSAGE))
            )
        self._dispatch(SubmitSucceeded(transaction))
        logger.info("Transaction %s created, refreshing the dashboard", transaction.id)
        # a load started before the write would miss the new transaction
        return await self.load(LoadPolicy.RESTART)


class DashboardServicesProvider(Provider):
    scope = Scope.APP

    controller = provide(DashboardController)
    presenter = provide(DashboardPresenter)

    @provide
    def get_formatter(self, settings: DisplaySettings) -> MonetaryFormatter:
        return MonetaryFormatter(
            locale=settings.locale,
            currency_symbol=settings.currency_symbol,
            placeholder=settings.placeholder,
        )
