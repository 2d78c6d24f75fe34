from tabq_engine.ops.aggregate import AGGREGATE_OPERATIONS, aggregate
from tabq_engine.ops.filter import build_predicate, filter_rows
from tabq_engine.ops.merge import merge_tables
from tabq_engine.ops.pivot import PIVOT_OPERATIONS, pivot
from tabq_engine.ops.preview import DEFAULT_PREVIEW_LIMIT, preview
from tabq_engine.ops.shaping import DEFAULT_ROW_CAP, CappedRows, ResultShaper
from tabq_engine.ops.sort import compare_cells, sort_rows
from tabq_engine.ops.validate import validate

__all__ = [
    "AGGREGATE_OPERATIONS",
    "CappedRows",
    "DEFAULT_PREVIEW_LIMIT",
    "DEFAULT_ROW_CAP",
    "PIVOT_OPERATIONS",
    "ResultShaper",
    "aggregate",
    "build_predicate",
    "compare_cells",
    "filter_rows",
    "merge_tables",
    "pivot",
    "preview",
    "sort_rows",
    "validate",
]
