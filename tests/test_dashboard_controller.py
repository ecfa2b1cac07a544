import asyncio

import pytest

from finance_dashboard.models.enums import DashboardStatus, LoadPolicy
from finance_dashboard.services.errors import (
    LOAD_FAILED_MESSAGE,
    SUBMIT_FAILED_MESSAGE,
    ForbiddenError,
    InvalidTransitionError,
    MissingReferenceError,
    RemoteValidationError,
    ServerError,
    UnknownTransportError,
)
from finance_dashboard.services.validation import (
    CATEGORY_REQUIRED,
    DESCRIPTION_REQUIRED,
)

pytestmark = pytest.mark.anyio


async def test_load_reaches_ready(controller, api):
    state = await controller.load()
    assert state.status is DashboardStatus.READY
    assert [category.name for category in state.categories] == ["Salary", "Groceries"]
    assert len(state.transactions) == 2
    assert state.summary.total_income == "1500.00"
    assert state.summary.balance == "1379.50"
    assert controller.state is state


@pytest.mark.parametrize(
    "error, message",
    [
        (ServerError(), "Internal server error. Try again later."),
        (ForbiddenError(), "Access denied. Check your permissions."),
        (UnknownTransportError(), LOAD_FAILED_MESSAGE),
        (RuntimeError("unexpected"), LOAD_FAILED_MESSAGE),
    ],
)
async def test_load_failure_is_classified(controller, api, error, message):
    api.store.error = error
    state = await controller.load()
    assert state.status is DashboardStatus.FAILED
    assert state.error == message


async def test_failed_summary_total_abandons_the_load(controller, api):
    await controller.load()
    api.summary.totals["balance"] = "0.00"
    api.summary.errors["income"] = ServerError()
    state = await controller.load()
    assert state.status is DashboardStatus.FAILED
    # the previous summary stays, no partially updated totals
    assert state.summary.balance == "1379.50"


async def test_retry_after_failure(controller, api):
    api.categories.error = ServerError()
    assert (await controller.load()).status is DashboardStatus.FAILED
    api.categories.error = None
    state = await controller.load()
    assert state.status is DashboardStatus.READY
    assert state.error is None


async def test_concurrent_loads_are_joined(controller, api):
    api.categories.gate = asyncio.Event()
    first = asyncio.create_task(controller.load())
    second = asyncio.create_task(controller.load())
    await asyncio.sleep(0.01)
    assert controller.state.status is DashboardStatus.LOADING
    api.categories.gate.set()
    first_state, second_state = await asyncio.gather(first, second)
    assert first_state is second_state
    assert api.categories.calls == 1
    assert api.store.calls == 1


async def test_restart_policy_discards_superseded_load(api):
    controller = api.controller(policy=LoadPolicy.RESTART)
    published = []
    controller.subscribe(published.append)

    api.categories.gate = asyncio.Event()
    first = asyncio.create_task(controller.load())
    await asyncio.sleep(0.01)
    api.categories.categories = api.categories.categories[:1]
    second = asyncio.create_task(controller.load())
    await asyncio.sleep(0.01)
    api.categories.gate.set()
    first_state, second_state = await asyncio.gather(first, second)

    assert api.categories.calls == 2
    assert first_state is second_state
    ready = [state for state in published if state.status is DashboardStatus.READY]
    assert len(ready) == 1
    assert len(ready[0].categories) == 1


async def test_subscribers_receive_every_state(controller):
    seen = []
    unsubscribe = controller.subscribe(lambda state: seen.append(state.status))
    await controller.load()
    assert seen == [DashboardStatus.LOADING, DashboardStatus.READY]
    unsubscribe()
    await controller.load()
    assert len(seen) == 2


async def test_failing_subscriber_does_not_break_actions(controller):
    def broken(state):
        raise RuntimeError("listener bug")

    controller.subscribe(broken)
    state = await controller.load()
    assert state.status is DashboardStatus.READY


async def test_submit_valid_draft_reloads(controller, api):
    await controller.load()
    controller.open_draft(
        description="Salary",
        amount="1500.00",
        date="2024-01-05",
        kind="Income",
        installment_count=1,
        category_id=3,
    )
    state = await controller.submit()
    assert len(api.store.created) == 1
    assert state.status is DashboardStatus.READY
    assert state.draft is None
    assert state.error is None
    assert len(state.transactions) == 3
    assert api.categories.calls == 2


async def test_invalid_draft_never_reaches_writer(controller, api):
    await controller.load()
    controller.open_draft(description="  ", amount="10")
    state = await controller.submit()
    assert api.store.created == []
    assert state.status is DashboardStatus.READY
    assert state.violations == (DESCRIPTION_REQUIRED, CATEGORY_REQUIRED)
    assert state.draft is not None


async def test_forbidden_writer_preserves_draft(controller, api, valid_draft):
    await controller.load()
    controller.open_draft(**valid_draft.model_dump())
    draft = controller.state.draft
    api.store.write_error = ForbiddenError()
    state = await controller.submit()
    assert state.status is DashboardStatus.READY
    assert state.draft == draft
    assert "permissions" in state.error
    assert not state.submitting
    assert api.categories.calls == 1


@pytest.mark.parametrize(
    "error, message",
    [
        (RemoteValidationError(), "Invalid data. Check the required fields."),
        (MissingReferenceError(), "Category not found."),
        (ServerError(), "Internal server error. Try again later."),
        (UnknownTransportError(), SUBMIT_FAILED_MESSAGE),
    ],
)
async def test_writer_failures_are_classified(
    controller, api, valid_draft, error, message
):
    await controller.load()
    controller.open_draft(**valid_draft.model_dump())
    api.store.write_error = error
    state = await controller.submit()
    assert state.error == message
    assert state.draft is not None


async def test_edit_and_cancel_draft(controller):
    await controller.load()
    controller.open_draft()
    state = controller.edit_draft(description="Rent", amount=900, category_id="")
    assert state.draft.description == "Rent"
    assert state.draft.amount == "900"
    assert state.draft.category_id is None
    state = controller.cancel_draft()
    assert state.draft is None


async def test_actions_outside_ready_are_rejected(controller):
    with pytest.raises(InvalidTransitionError):
        controller.open_draft()
    with pytest.raises(InvalidTransitionError):
        await controller.submit()
    with pytest.raises(InvalidTransitionError):
        controller.edit_draft(description="x")


async def test_dismiss_error(controller, api):
    api.store.error = ServerError()
    await controller.load()
    state = controller.dismiss_error()
    assert state.error is None
    assert state.status is DashboardStatus.FAILED


async def test_cancelled_submit_leaves_draft_editable(controller, api, valid_draft):
    await controller.load()
    controller.open_draft(**valid_draft.model_dump())
    api.store.write_gate = asyncio.Event()
    submit = asyncio.create_task(controller.submit())
    await asyncio.sleep(0.01)
    assert controller.state.submitting

    submit.cancel()
    with pytest.raises(asyncio.CancelledError):
        await submit

    assert not controller.state.submitting
    assert controller.state.error == SUBMIT_FAILED_MESSAGE
    assert controller.state.draft is not None
    assert controller.cancel_draft().draft is None


async def test_refresh_after_submit_replaces_stale_load(controller, api, valid_draft):
    await controller.load()
    controller.open_draft(**valid_draft.model_dump())
    api.store.write_gate = asyncio.Event()
    submit = asyncio.create_task(controller.submit())
    await asyncio.sleep(0.01)

    # a reload that fetches transactions before the write lands
    api.categories.gate = asyncio.Event()
    reload = asyncio.create_task(controller.load())
    await asyncio.sleep(0.01)
    assert api.store.calls == 2

    api.store.write_gate.set()
    await asyncio.sleep(0.01)
    api.categories.gate.set()
    submit_state, reload_state = await asyncio.gather(submit, reload)

    assert submit_state is reload_state
    assert len(submit_state.transactions) == 3
    assert submit_state.draft is None
    assert api.store.calls == 3


async def test_simultaneous_failures_report_by_priority(controller, api):
    api.categories.error = ServerError()
    api.store.error = ForbiddenError()
    state = await controller.load()
    assert state.error == "Access denied. Check your permissions."
