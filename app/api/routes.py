from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.core.auth import request_actor
from app.core.config import get_settings
from app.core.responses import page_meta, success_response
from app.db.session import get_db
from app.models.entities import Category, ContentItem, ContentKind
from app.schemas import (
    AuditEntryOut,
    CategoryCreate,
    CategoryOut,
    ContentCreate,
    ContentListResponse,
    ContentStatusUpdate,
    StatusCountsOut,
    StatusDescriptorOut,
    StatusPredicatesOut,
    StatusResolutionOut,
    StatusTaxonomyOut,
)
from app.services.audit import list_audit_entries, record_audit
from app.services.content import (
    apply_status_transition,
    count_by_status,
    create_content,
    list_content,
    serialize_content,
)
from app.services.idempotency import resolve_cached_response, store_response
from app.state_machine.content_status import InvalidStatusTransitionError, StatusEngine, get_status_engine
from app.state_machine.taxonomy import ContentStatus

router = APIRouter(prefix="/v1", tags=["v1"])


def _get_content(db: Session, content_id: int) -> ContentItem:
    item = db.query(ContentItem).filter(ContentItem.id == content_id).one_or_none()
    if not item:
        raise HTTPException(status_code=404, detail="Content not found")
    return item


@router.get("/statuses")
def list_statuses(engine: StatusEngine = Depends(get_status_engine)):
    payload = StatusTaxonomyOut(
        statuses=[StatusDescriptorOut.model_validate(engine.describe(status)) for status in engine.all_statuses()],
        public_statuses=list(engine.public_statuses()),
        aliases=dict(engine.aliases),
    )
    return success_response(payload.model_dump(mode="json"))


@router.get("/statuses/resolve")
def resolve_status(
    raw: str | None = Query(default=None),
    strict: bool = Query(default=False),
    engine: StatusEngine = Depends(get_status_engine),
):
    if strict:
        engine.resolve_strict(raw)
    classification = engine.classify(raw)
    payload = StatusResolutionOut(
        raw=raw,
        status=classification.status,
        descriptor=StatusDescriptorOut.model_validate(classification.descriptor),
        predicates=StatusPredicatesOut(
            is_public=classification.is_public,
            is_pending=classification.is_pending,
            is_rejected=classification.is_rejected,
            is_verified=classification.is_verified,
        ),
        allowed_next_states=list(classification.allowed_next_states),
    )
    return success_response(payload.model_dump(mode="json"))


@router.get("/categories")
def list_categories(db: Session = Depends(get_db)):
    categories = db.query(Category).order_by(Category.name.asc()).all()
    return success_response([CategoryOut.model_validate(category).model_dump() for category in categories])


@router.post("/categories")
def create_category(
    payload: CategoryCreate,
    request: Request,
    idempotency_key: str = Header(alias="Idempotency-Key"),
    db: Session = Depends(get_db),
):
    cached = resolve_cached_response(db, request, "/v1/categories", payload.model_dump())
    if cached:
        return success_response(cached)

    if db.query(Category).filter(Category.name == payload.name).one_or_none():
        raise HTTPException(status_code=409, detail="Category already exists")

    category = Category(**payload.model_dump())
    db.add(category)
    db.flush()
    record_audit(db, request_actor(request, "admin"), "create", "category", category.id, payload.model_dump())
    response = CategoryOut.model_validate(category).model_dump()
    store_response(db, idempotency_key, "/v1/categories", payload.model_dump(), response)
    db.commit()
    return success_response(response)


@router.get("/content")
def get_content_list(
    kind: ContentKind | None = Query(default=None),
    status: ContentStatus | None = Query(default=None),
    category_id: int | None = Query(default=None),
    author: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    show_all: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    engine: StatusEngine = Depends(get_status_engine),
):
    items, total = list_content(
        db,
        engine,
        kind=kind,
        status=status,
        category_id=category_id,
        author=author,
        search=search,
        show_all=show_all,
        limit=limit,
        offset=offset,
    )
    payload = ContentListResponse.model_validate(
        {"items": [serialize_content(engine, item) for item in items], "total": total}
    )
    return success_response(payload.model_dump(mode="json"), meta=page_meta(total, limit, offset))


@router.get("/content/status-counts")
def get_status_counts(
    kind: ContentKind | None = Query(default=None),
    db: Session = Depends(get_db),
    engine: StatusEngine = Depends(get_status_engine),
):
    payload = StatusCountsOut(**count_by_status(db, engine, kind))
    return success_response(payload.model_dump())


@router.get("/content/{content_id}")
def get_content_detail(
    content_id: int,
    db: Session = Depends(get_db),
    engine: StatusEngine = Depends(get_status_engine),
):
    return success_response(serialize_content(engine, _get_content(db, content_id)))


@router.get("/content/{content_id}/history")
def get_content_history(content_id: int, db: Session = Depends(get_db)):
    _get_content(db, content_id)
    entries = list_audit_entries(db, "content", content_id)
    return success_response([AuditEntryOut.model_validate(entry).model_dump(mode="json") for entry in entries])


@router.post("/content")
def submit_content(
    payload: ContentCreate,
    request: Request,
    idempotency_key: str = Header(alias="Idempotency-Key"),
    db: Session = Depends(get_db),
    engine: StatusEngine = Depends(get_status_engine),
):
    request_payload = payload.model_dump(mode="json")
    cached = resolve_cached_response(db, request, "/v1/content", request_payload)
    if cached:
        return success_response(cached)

    if payload.category_id is not None and not db.get(Category, payload.category_id):
        raise HTTPException(status_code=404, detail="Category not found")

    item = create_content(db, payload, get_settings().default_content_status)
    response = serialize_content(engine, item)
    store_response(db, idempotency_key, "/v1/content", request_payload, response)
    db.commit()
    return success_response(response)


@router.post("/content/{content_id}/status")
def transition_content_status(
    content_id: int,
    payload: ContentStatusUpdate,
    request: Request,
    idempotency_key: str = Header(alias="Idempotency-Key"),
    db: Session = Depends(get_db),
    engine: StatusEngine = Depends(get_status_engine),
):
    endpoint = f"/v1/content/{content_id}/status"
    cached = resolve_cached_response(db, request, endpoint, payload.model_dump(mode="json"))
    if cached:
        return success_response(cached)

    item = _get_content(db, content_id)
    if payload.current is not None and item.status != payload.current:
        raise HTTPException(status_code=409, detail="Content status mismatch")

    try:
        apply_status_transition(db, engine, item, payload.target, request_actor(request))
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    db.flush()
    response = serialize_content(engine, item)
    store_response(db, idempotency_key, endpoint, payload.model_dump(mode="json"), response)
    db.commit()
    return success_response(response)


@router.delete("/content/{content_id}")
def delete_content(
    content_id: int,
    request: Request,
    idempotency_key: str = Header(alias="Idempotency-Key"),
    db: Session = Depends(get_db),
):
    endpoint = f"/v1/content/{content_id}"
    cached = resolve_cached_response(db, request, endpoint, {})
    if cached:
        return success_response(cached)

    item = _get_content(db, content_id)
    record_audit(
        db,
        request_actor(request, "admin"),
        "delete",
        "content",
        item.id,
        {"title": item.title, "kind": item.kind.value, "status": item.status},
    )
    db.delete(item)
    response = {"content_id": content_id, "deleted": True}
    store_response(db, idempotency_key, endpoint, {}, response)
    db.commit()
    return success_response(response)
