from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class ContentStatus(str, Enum):
    pending = "pending"
    rejected = "rejected"
    verified = "verified"


class Severity(str, Enum):
    informational = "informational"
    negative = "negative"
    positive = "positive"
    neutral = "neutral"


@dataclass(frozen=True)
class StatusDescriptor:
    status: ContentStatus | None
    label: str
    severity: Severity
    color: str
    icon: str | None
    description: str

    @property
    def recognized(self) -> bool:
        return self.status is not None


# Display order for option lists and filters.
STATUS_ORDER: tuple[ContentStatus, ...] = (
    ContentStatus.pending,
    ContentStatus.rejected,
    ContentStatus.verified,
)

DEFAULT_DESCRIPTORS: Mapping[ContentStatus, StatusDescriptor] = MappingProxyType({
    ContentStatus.pending: StatusDescriptor(
        status=ContentStatus.pending,
        label="Pending Review",
        severity=Severity.informational,
        color="yellow",
        icon="clock",
        description="Awaiting admin review",
    ),
    ContentStatus.rejected: StatusDescriptor(
        status=ContentStatus.rejected,
        label="Rejected",
        severity=Severity.negative,
        color="red",
        icon="x-circle",
        description="Not suitable for publication",
    ),
    ContentStatus.verified: StatusDescriptor(
        status=ContentStatus.verified,
        label="Verified",
        severity=Severity.positive,
        color="green",
        icon="award",
        description="Verified and approved for public viewing",
    ),
})

UNKNOWN_DESCRIPTOR = StatusDescriptor(
    status=None,
    label="Unknown",
    severity=Severity.neutral,
    color="gray",
    icon=None,
    description="Status value is not recognized; treated as not public",
)

# Values written before the three-state model. StatusEngine adds the identity entries.
LEGACY_ALIASES: Mapping[str, ContentStatus] = MappingProxyType({
    "accepted": ContentStatus.verified,
    "approved": ContentStatus.verified,
    "refused": ContentStatus.rejected,
})

_ALLOWED_NEXT: Mapping[ContentStatus, tuple[ContentStatus, ...]] = MappingProxyType({
    ContentStatus.pending: (ContentStatus.verified, ContentStatus.rejected),
    ContentStatus.rejected: (ContentStatus.pending, ContentStatus.verified),
    ContentStatus.verified: (ContentStatus.pending, ContentStatus.rejected),
})


def next_states(current: ContentStatus | None) -> tuple[ContentStatus, ...]:
    if current is None:
        return STATUS_ORDER
    return _ALLOWED_NEXT[current]
