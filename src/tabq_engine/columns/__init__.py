from tabq_engine.columns.resolver import ColumnMatch, ColumnResolver
from tabq_engine.columns.synonyms import DEFAULT_SYNONYMS, SynonymTable

__all__ = ["ColumnMatch", "ColumnResolver", "DEFAULT_SYNONYMS", "SynonymTable"]
