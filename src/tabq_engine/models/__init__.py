from tabq_engine.models.errors import (
    ColumnNotFoundError,
    ConfigError,
    EmptyInputError,
    ErrorKind,
    InputError,
    InvalidParameterError,
    TabqEngineError,
    UnknownOperationError,
)
from tabq_engine.models.results import (
    AggregateResult,
    ColumnIssue,
    FilterResult,
    GroupedAggregateResult,
    GroupResult,
    MergeResult,
    OperationResult,
    PivotResult,
    PreviewResult,
    SortResult,
    TableDescription,
    ValidationReport,
)
from tabq_engine.models.table import Table

__all__ = [
    "AggregateResult",
    "ColumnIssue",
    "ColumnNotFoundError",
    "ConfigError",
    "EmptyInputError",
    "ErrorKind",
    "FilterResult",
    "GroupResult",
    "GroupedAggregateResult",
    "InputError",
    "InvalidParameterError",
    "MergeResult",
    "OperationResult",
    "PivotResult",
    "PreviewResult",
    "SortResult",
    "Table",
    "TableDescription",
    "TabqEngineError",
    "UnknownOperationError",
    "ValidationReport",
]
