from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, HttpUrl

from app.models.entities import ContentKind
from app.state_machine.taxonomy import ContentStatus, Severity


class ApiError(BaseModel):
    code: str
    message: str
    trace_id: str
    details: dict[str, Any] = Field(default_factory=dict)


class ApiEnvelope(BaseModel):
    data: Any = None
    error: ApiError | None = None
    meta: dict[str, Any] = Field(default_factory=dict)


class StatusDescriptorOut(BaseModel):
    status: ContentStatus | None
    label: str
    severity: Severity
    color: str
    icon: str | None
    description: str
    recognized: bool

    model_config = {"from_attributes": True}


class StatusPredicatesOut(BaseModel):
    is_public: bool
    is_pending: bool
    is_rejected: bool
    is_verified: bool


class StatusResolutionOut(BaseModel):
    raw: str | None
    status: ContentStatus | None
    descriptor: StatusDescriptorOut
    predicates: StatusPredicatesOut
    allowed_next_states: list[ContentStatus]


class StatusTaxonomyOut(BaseModel):
    statuses: list[StatusDescriptorOut]
    public_statuses: list[ContentStatus]
    aliases: dict[str, ContentStatus]


class StatusCountsOut(BaseModel):
    pending: int = 0
    rejected: int = 0
    verified: int = 0
    unrecognized: int = 0
    total: int = 0


class CategoryCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    description: str | None = None


class CategoryOut(BaseModel):
    id: int
    name: str
    description: str | None = None

    model_config = {"from_attributes": True}


class ContentCreate(BaseModel):
    kind: ContentKind
    title: str = Field(min_length=1, max_length=500)
    description: str | None = None
    media_url: HttpUrl | None = None
    category_id: int | None = None
    author: str = Field(min_length=1, max_length=255)
    journal: str | None = Field(default=None, max_length=255)
    year: int | None = Field(default=None, ge=1800, le=2100)


class ContentOut(BaseModel):
    id: int
    kind: ContentKind
    title: str
    description: str | None = None
    media_url: str | None = None
    category_id: int | None = None
    category_name: str | None = None
    author: str
    journal: str | None = None
    year: int | None = None
    raw_status: str
    status: ContentStatus | None
    descriptor: StatusDescriptorOut
    is_public: bool
    allowed_next_states: list[ContentStatus]
    created_at: datetime
    updated_at: datetime


class ContentListResponse(BaseModel):
    items: list[ContentOut]
    total: int


class ContentStatusUpdate(BaseModel):
    target: ContentStatus
    current: str | None = None


class AuditEntryOut(BaseModel):
    id: int
    actor: str
    action: str
    payload_json: dict
    created_at: datetime

    model_config = {"from_attributes": True}
