from app.schemas.common import (
    ApiEnvelope,
    ApiError,
    AuditEntryOut,
    CategoryCreate,
    CategoryOut,
    ContentCreate,
    ContentListResponse,
    ContentOut,
    ContentStatusUpdate,
    StatusCountsOut,
    StatusDescriptorOut,
    StatusPredicatesOut,
    StatusResolutionOut,
    StatusTaxonomyOut,
)

__all__ = [
    "ApiEnvelope",
    "ApiError",
    "AuditEntryOut",
    "CategoryCreate",
    "CategoryOut",
    "ContentCreate",
    "ContentListResponse",
    "ContentOut",
    "ContentStatusUpdate",
    "StatusCountsOut",
    "StatusDescriptorOut",
    "StatusPredicatesOut",
    "StatusResolutionOut",
    "StatusTaxonomyOut",
]
