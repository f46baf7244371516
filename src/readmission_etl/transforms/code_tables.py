"""
Build lookup (code) tables: one generic builder for engine-assigned ids and
one for domains keyed by the dataset's own numeric codes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Mapping
import pandas as pd
from readmission_etl.core.config import NormalizationConfig
from readmission_etl.core.errors import DomainInconsistency, UnresolvedReference
from readmission_etl.transforms.schema import (
    CATEGORICAL_DOMAINS,
    FIXED_CODE_DOMAINS,
    MEDICATION_COLUMNS,
)
from readmission_etl.transforms.sentinels import is_absent, normalize_sentinel

log = logging.getLogger(__name__)

NameSource = Callable[[int, Any], str]


class CodeTable:
    """
    Ordered bijection between natural values and surrogate ids.

    New values get the next dense id, starting at 1 (or after the highest
    seeded id), in the order they are first added.
    """

    def __init__(self, domain: str):
        self.domain = domain
        self._by_value: dict[Any, int] = {}
        self._by_id: dict[int, Any] = {}
        self._next_id = 1

    @classmethod
    def from_pairs(cls, domain: str, pairs: Iterable[tuple[int, Any]]):
        table = cls(domain)
        for surrogate_id, value in pairs:
            table._put(int(surrogate_id), value)
        return table

    def _put(self, surrogate_id: int, value: Any) -> None:
        known_id = self._by_value.get(value)
        if known_id is not None and known_id != surrogate_id:
            raise DomainInconsistency(
                self.domain, f"value {value!r} mapped to both {known_id} and {surrogate_id}"
            )
        known_value = self._by_id.get(surrogate_id, value)
        if known_value != value:
            raise DomainInconsistency(
                self.domain, f"id {surrogate_id} named both {known_value!r} and {value!r}"
            )
        self._by_value[value] = surrogate_id
        self._by_id[surrogate_id] = value
        self._next_id = max(self._next_id, surrogate_id + 1)

    def add(self, value: Any) -> int:
        known_id = self._by_value.get(value)
        if known_id is not None:
            return known_id
        surrogate_id = self._next_id
        self._put(surrogate_id, value)
        return surrogate_id

    def resolve(self, value: Any) -> int | None:
        """Surrogate id for `value`; None stays None, unknown values raise."""
        if value is None:
            return None
        try:
            return self._by_value[value]
        except KeyError:
            raise UnresolvedReference(self.domain, value) from None

    def has_id(self, surrogate_id: Any) -> bool:
        return surrogate_id in self._by_id

    def value_of(self, surrogate_id: int) -> Any:
        return self._by_id[surrogate_id]

    def items(self) -> list[tuple[int, Any]]:
        return list(self._by_id.items())

    def ids(self) -> list[int]:
        return list(self._by_id)

    def values(self) -> list[Any]:
        return list(self._by_value)

    def __contains__(self, value: Any) -> bool:
        return value in self._by_value

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        return iter(self._by_id.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.domain!r}, {len(self)} values)"


class FixedCodeTable(CodeTable):
    """Code table whose ids are the dataset's numeric codes; values are display names."""

    def add_code(self, code: int, name: str) -> int:
        self._put(code, name)
        return code

    def resolve(self, code: Any) -> int | None:
        if code is None:
            return None
        code = as_code(self.domain, code)
        if code not in self._by_id:
            raise UnresolvedReference(self.domain, code)
        return code


def as_code(domain: str, raw: Any) -> int:
    """Coerce a raw numeric code to a non-negative int."""
    if isinstance(raw, float) and not raw.is_integer():
        raise DomainInconsistency(domain, f"code {raw!r} is not an integer")
    try:
        code = int(raw)
    except (TypeError, ValueError):
        raise DomainInconsistency(domain, f"code {raw!r} is not an integer") from None
    if code < 0:
        raise DomainInconsistency(domain, f"code {code} is negative")
    return code


def template_name_source(template: str) -> NameSource:
    return lambda code, _raw: template.format(code=code)


def build_code_table(
    domain: str,
    values: Iterable[Any],
    seed: Iterable[tuple[int, Any]] | None = None,
) -> CodeTable:
    """Assign ids to the distinct non-absent values in first-seen order."""
    table = CodeTable.from_pairs(domain, seed or ())
    for value in values:
        if not is_absent(value):
            table.add(value)
    return table


def build_fixed_code_table(
    domain: str,
    pairs: Iterable[tuple[Any, Any]],
    template: str | None = None,
    name_source: NameSource | None = None,
    seed: Iterable[tuple[int, Any]] | None = None,
) -> FixedCodeTable:
    """
    Build a table from (code, raw value) pairs, using the code itself as id.

    The display name comes from `name_source(code, raw)` if given, otherwise
    from `template.format(code=code)`. A code that derives two different
    names raises DomainInconsistency.
    """
    if name_source is None:
        if template is None:
            raise ValueError(f"{domain}: need a name template or a name source")
        name_source = template_name_source(template)

    table = FixedCodeTable.from_pairs(domain, seed or ())
    for code, raw in pairs:
        if is_absent(code):
            continue
        code = as_code(domain, code)
        table.add_code(code, name_source(code, raw))
    return table


@dataclass
class CodeTableSet:
    tables: dict[str, CodeTable] = field(default_factory=dict)

    def __getitem__(self, domain: str) -> CodeTable:
        return self.tables[domain]

    def items(self):
        return self.tables.items()


def _column(frame: pd.DataFrame, column: str, config: NormalizationConfig) -> Iterable[Any]:
    if column not in frame.columns:
        return ()
    sentinel = config.sentinel_for(column)
    return (normalize_sentinel(v, sentinel) for v in frame[column])


def build_code_tables(
    frame: pd.DataFrame,
    config: NormalizationConfig,
    seed: Mapping[str, Iterable[tuple[int, Any]]] | None = None,
    name_sources: Mapping[str, NameSource] | None = None,
) -> CodeTableSet:
    """Full pass over the raw rows building every code table."""
    seed = seed or {}
    name_sources = name_sources or {}
    tables = CodeTableSet()

    for domain, column in CATEGORICAL_DOMAINS:
        tables.tables[domain] = build_code_table(
            domain, _column(frame, column, config), seed=seed.get(domain)
        )

    for domain, column in FIXED_CODE_DOMAINS:
        codes = list(_column(frame, column, config))
        tables.tables[domain] = build_fixed_code_table(
            domain,
            zip(codes, codes),
            template=config.name_templates.get(domain),
            name_source=name_sources.get(domain),
            seed=seed.get(domain),
        )

    tables.tables["medication"] = build_code_table(
        "medication", [name for _, name in MEDICATION_COLUMNS], seed=seed.get("medication")
    )

    med_cols = [col for col, _ in MEDICATION_COLUMNS]
    statuses = frame.reindex(columns=med_cols).to_numpy(dtype=object).ravel()
    tables.tables["med_status"] = build_code_table("med_status", statuses, seed=seed.get("med_status"))

    for domain, table in tables.items():
        log.info("Code table %s: %d values", domain, len(table))
    return tables
