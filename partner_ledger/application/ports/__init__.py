"""Application ports package."""

from .database import DatabaseEnginePort
from .table_store import (
    ErrorCallback,
    Row,
    RowFetchPort,
    RowMutationPort,
    SuccessCallback,
    TableStorePort,
)

__all__ = [
    "DatabaseEnginePort",
    "ErrorCallback",
    "Row",
    "RowFetchPort",
    "RowMutationPort",
    "SuccessCallback",
    "TableStorePort",
]
