"""Column name normalization and header resolution."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from rapidfuzz.distance import Levenshtein

from tabq_engine.columns.synonyms import SynonymTable
from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.models.errors import EmptyInputError

MatchStrategy = Literal["exact", "containment", "fuzzy"]

CONTAINMENT_CONFIDENCE = 0.8

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class ColumnMatch:
    """Outcome of :meth:`ColumnResolver.resolve_match`.

    ``confidence`` is 1.0 for exact matches, fixed for containment matches and
    ``1 - distance / longest`` for fuzzy matches, so a caller can flag weak
    matches instead of trusting them blindly.
    """

    header: str
    index: int
    strategy: MatchStrategy
    distance: int
    confidence: float


def clean(name: Any) -> str:
    if name is None:
        return ""
    text = str(name).lower().strip()
    text = _NON_WORD.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


class ColumnResolver:
    """Map free-text column references onto canonical names and headers."""

    def __init__(self, synonyms: SynonymTable | None = None, *, logger: EngineLogger | None = None) -> None:
        self.synonyms = synonyms if synonyms is not None else SynonymTable.default()
        self.logger = logger

    def normalize(self, name: Any) -> str:
        cleaned = clean(name)
        if not cleaned:
            return ""

        canonical = self.synonyms.match(cleaned)
        if canonical is not None:
            return canonical
        return cleaned.replace(" ", "_")

    def map_headers(self, headers: Sequence[Any]) -> list[str]:
        return [self.normalize(h) for h in headers]

    def resolve(self, query: str, headers: Sequence[str]) -> str:
        return self.resolve_match(query, headers).header

    def resolve_match(self, query: str, headers: Sequence[str]) -> ColumnMatch:
        """Resolve ``query`` against ``headers``: exact, then containment, then edit distance.

        Never reports "not found" for a non-empty header list; the worst case is
        a low-confidence fuzzy match. An empty header list raises
        :class:`EmptyInputError`.
        """

        if not headers:
            raise EmptyInputError("Cannot resolve a column against an empty header list", parameter="column")

        target = self.normalize(query)
        normalized = self.map_headers(headers)

        # A header spelled like the query wins over one that only shares its canonical field.
        match: ColumnMatch | None = None
        cleaned_query = clean(query)
        exact_idx = next((i for i, h in enumerate(headers) if cleaned_query and clean(h) == cleaned_query), None)
        if exact_idx is None:
            exact_idx = next((i for i, candidate in enumerate(normalized) if candidate == target), None)
        if exact_idx is not None:
            match = ColumnMatch(headers[exact_idx], exact_idx, "exact", 0, 1.0)

        if match is None:
            for idx, candidate in enumerate(normalized):
                if target in candidate or candidate in target:
                    distance = Levenshtein.distance(target, candidate)
                    match = ColumnMatch(headers[idx], idx, "containment", distance, CONTAINMENT_CONFIDENCE)
                    break

        if match is None:
            best_idx, best_distance = 0, None
            for idx, candidate in enumerate(normalized):
                distance = Levenshtein.distance(target, candidate)
                if best_distance is None or distance < best_distance:
                    best_idx, best_distance = idx, distance
            distance = best_distance or 0
            longest = max(len(target), len(normalized[best_idx]), 1)
            match = ColumnMatch(headers[best_idx], best_idx, "fuzzy", distance, round(1 - distance / longest, 4))

        if self.logger is not None:
            self.logger.event(
                "column.resolved",
                level=logging.DEBUG,
                data={
                    "query": str(query),
                    "header": str(match.header),
                    "strategy": match.strategy,
                    "distance": match.distance,
                    "confidence": float(match.confidence),
                },
            )
        return match

    def find_column(self, term: str, headers: Sequence[str]) -> int | None:
        """Single-stage containment lookup used by table operations.

        Compares cleaned names only. Synonyms are not applied here, since two
        different headers can share a canonical field ("Unit Cost" and "Price").
        """

        target = clean(term)
        if not target:
            return None
        for idx, header in enumerate(headers):
            candidate = clean(header)
            if not candidate:
                continue
            if target in candidate or candidate in target:
                return idx
        return None


__all__ = ["CONTAINMENT_CONFIDENCE", "ColumnMatch", "ColumnResolver", "MatchStrategy", "clean"]
