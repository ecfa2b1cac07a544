from enum import StrEnum


class TransactionKind(StrEnum):
    INCOME = "Income"
    EXPENSE = "Expense"


class CategoryKind(StrEnum):
    INCOME = "Income"
    EXPENSE = "Expense"


class DashboardStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class LoadPolicy(StrEnum):
    JOIN = "join"
    RESTART = "restart"
