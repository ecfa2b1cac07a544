from .enums import CategoryKind, DashboardStatus, LoadPolicy, TransactionKind

__all__ = [
    "CategoryKind",
    "DashboardStatus",
    "LoadPolicy",
    "TransactionKind",
]
