from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from tabq_engine.models.errors import ConfigError

DEFAULT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "quantity": ("qty", "amount", "count", "number"),
    "price": ("cost", "rate", "value", "amount"),
    "revenue": ("sales", "income", "earnings"),
    "customer": ("client", "buyer", "user"),
    "date": ("time", "timestamp", "created"),
    "product": ("item", "goods", "merchandise"),
    "region": ("area", "location", "territory"),
    "category": ("type", "class", "group"),
}


@dataclass(frozen=True, slots=True)
class SynonymTable:
    """Immutable canonical field -> alias substrings table.

    Entry order is the tie-break: the first canonical field with an alias
    contained in the text wins.
    """

    entries: tuple[tuple[str, tuple[str, ...]], ...]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "SynonymTable":
        entries: list[tuple[str, tuple[str, ...]]] = []
        for canonical, aliases in mapping.items():
            name = str(canonical).strip().lower()
            if not name:
                raise ConfigError("Synonym table contains an empty canonical field name")
            if isinstance(aliases, str):
                raise ConfigError(f"Aliases for {name!r} must be a list of strings, got a string")
            cleaned = tuple(str(alias).strip().lower() for alias in aliases)
            if any(not alias for alias in cleaned):
                raise ConfigError(f"Synonym table has an empty alias for {name!r}")
            entries.append((name, cleaned))
        return cls(entries=tuple(entries))

    @classmethod
    def default(cls) -> "SynonymTable":
        return cls.from_mapping(DEFAULT_SYNONYMS)

    def match(self, text: str) -> str | None:
        for canonical, aliases in self.entries:
            if any(alias in text for alias in aliases):
                return canonical
        return None

    def canonical_fields(self) -> list[str]:
        return [canonical for canonical, _ in self.entries]

    def as_dict(self) -> dict[str, list[str]]:
        return {canonical: list(aliases) for canonical, aliases in self.entries}

    def __iter__(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["DEFAULT_SYNONYMS", "SynonymTable"]
