"""Moderation status engine for submitted content.

Raw ``status`` strings come from stored rows of any age. ``StatusEngine.resolve``
is the only place they are interpreted; everything else works on
``ContentStatus`` values. Unrecognized values never raise from the lenient
API: they resolve to ``None``, fail closed on every predicate and render with
the unknown descriptor.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from app.core.config import get_settings
from app.core.observability import UNRECOGNIZED_STATUS_COUNT
from app.state_machine.taxonomy import (
    DEFAULT_DESCRIPTORS,
    LEGACY_ALIASES,
    STATUS_ORDER,
    UNKNOWN_DESCRIPTOR,
    ContentStatus,
    StatusDescriptor,
    next_states,
)

logger = logging.getLogger(__name__)


class UnrecognizedStatusError(ValueError):
    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"Unrecognized content status: {raw!r}")


class InvalidStatusTransitionError(ValueError):
    def __init__(self, raw: object, target: ContentStatus):
        self.raw = raw
        self.target = target
        super().__init__(f"Invalid content status transition: {raw!r} -> {target.value}")


@dataclass(frozen=True)
class StatusClassification:
    raw: str | None
    status: ContentStatus | None
    descriptor: StatusDescriptor
    allowed_next_states: tuple[ContentStatus, ...]

    @property
    def is_public(self) -> bool:
        return self.status is ContentStatus.verified

    @property
    def is_pending(self) -> bool:
        return self.status is ContentStatus.pending

    @property
    def is_rejected(self) -> bool:
        return self.status is ContentStatus.rejected

    @property
    def is_verified(self) -> bool:
        return self.is_public


class StatusEngine:
    def __init__(
        self,
        aliases: Mapping[str, ContentStatus],
        descriptors: Mapping[ContentStatus, StatusDescriptor],
    ):
        table: dict[str, ContentStatus] = {status.value: status for status in ContentStatus}
        for alias, target in aliases.items():
            if not isinstance(target, ContentStatus):
                raise ValueError(f"Alias {alias!r} must map to a canonical status, got {target!r}")
            if alias in table and table[alias] != target:
                raise ValueError(f"Alias {alias!r} conflicts with canonical status {table[alias].value}")
            table[alias] = target

        missing = [status.value for status in ContentStatus if status not in descriptors]
        if missing:
            raise ValueError(f"Missing status descriptors: {', '.join(missing)}")

        self._aliases = MappingProxyType(table)
        self._descriptors = MappingProxyType(dict(descriptors))

    @property
    def aliases(self) -> Mapping[str, ContentStatus]:
        return self._aliases

    def _lookup(self, raw: object) -> ContentStatus | None:
        if not isinstance(raw, str):
            return None
        return self._aliases.get(raw)

    def resolve(self, raw: object) -> ContentStatus | None:
        status = self._lookup(raw)
        if status is None:
            logger.warning("Unrecognized content status %r", raw)
            UNRECOGNIZED_STATUS_COUNT.inc()
        return status

    def resolve_strict(self, raw: object) -> ContentStatus:
        status = self._lookup(raw)
        if status is None:
            raise UnrecognizedStatusError(raw)
        return status

    def resolve_or(self, raw: object, default: ContentStatus) -> ContentStatus:
        status = self._lookup(raw)
        return default if status is None else status

    def is_public(self, raw: object) -> bool:
        return self.resolve(raw) is ContentStatus.verified

    def is_pending(self, raw: object) -> bool:
        return self.resolve(raw) is ContentStatus.pending

    def is_rejected(self, raw: object) -> bool:
        return self.resolve(raw) is ContentStatus.rejected

    def is_verified(self, raw: object) -> bool:
        return self.is_public(raw)

    def allowed_next_states(self, raw: object) -> tuple[ContentStatus, ...]:
        return next_states(self.resolve(raw))

    def can_transition(self, raw: object, target: ContentStatus) -> bool:
        return target in self.classify(raw).allowed_next_states

    def enforce_transition(self, raw: object, target: ContentStatus) -> StatusClassification:
        current = self.classify(raw)
        if target not in current.allowed_next_states:
            raise InvalidStatusTransitionError(raw, target)
        return current

    def classify(self, raw: object) -> StatusClassification:
        """Resolve ``raw`` once and derive everything callers display or filter on."""
        status = self.resolve(raw)
        return StatusClassification(
            raw=raw if isinstance(raw, str) else None,
            status=status,
            descriptor=self.describe(status),
            allowed_next_states=next_states(status),
        )

    def describe(self, status: ContentStatus | None) -> StatusDescriptor:
        if status is None:
            return UNKNOWN_DESCRIPTOR
        return self._descriptors[status]

    def describe_raw(self, raw: object) -> StatusDescriptor:
        return self.describe(self.resolve(raw))

    def all_statuses(self) -> tuple[ContentStatus, ...]:
        return STATUS_ORDER

    def public_statuses(self) -> tuple[ContentStatus, ...]:
        return (ContentStatus.verified,)

    def raw_values_for(self, statuses: ContentStatus | Iterable[ContentStatus]) -> list[str]:
        """Every stored value, canonical or legacy, that resolves to one of ``statuses``."""
        if isinstance(statuses, ContentStatus):
            statuses = (statuses,)
        wanted = set(statuses)
        return sorted(raw for raw, status in self._aliases.items() if status in wanted)


def build_status_engine(extra_aliases: Mapping[str, ContentStatus] | None = None) -> StatusEngine:
    aliases = dict(LEGACY_ALIASES)
    if extra_aliases:
        aliases.update(extra_aliases)
    return StatusEngine(aliases, DEFAULT_DESCRIPTORS)


@lru_cache
def get_status_engine() -> StatusEngine:
    return build_status_engine(get_settings().legacy_status_alias_map)
