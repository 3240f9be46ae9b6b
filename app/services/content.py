from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.observability import STATUS_TRANSITION_COUNT
from app.models.entities import ContentItem, ContentKind
from app.schemas import ContentCreate, ContentOut, StatusDescriptorOut
from app.services.audit import record_audit
from app.state_machine.content_status import StatusEngine
from app.state_machine.taxonomy import ContentStatus


def serialize_content(engine: StatusEngine, item: ContentItem) -> dict:
    classification = engine.classify(item.status)
    payload = ContentOut(
        id=item.id,
        kind=item.kind,
        title=item.title,
        description=item.description,
        media_url=item.media_url,
        category_id=item.category_id,
        category_name=item.category.name if item.category else None,
        author=item.author,
        journal=item.journal,
        year=item.year,
        raw_status=item.status,
        status=classification.status,
        descriptor=StatusDescriptorOut.model_validate(classification.descriptor),
        is_public=classification.is_public,
        allowed_next_states=list(classification.allowed_next_states),
        created_at=item.created_at,
        updated_at=item.updated_at,
    )
    return payload.model_dump(mode="json")


def list_content(
    db: Session,
    engine: StatusEngine,
    *,
    kind: ContentKind | None = None,
    status: ContentStatus | None = None,
    category_id: int | None = None,
    author: str | None = None,
    search: str | None = None,
    show_all: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[ContentItem], int]:
    query = db.query(ContentItem)

    if status:
        query = query.filter(ContentItem.status.in_(engine.raw_values_for(status)))
    elif not show_all:
        query = query.filter(ContentItem.status.in_(engine.raw_values_for(engine.public_statuses())))

    if kind:
        query = query.filter(ContentItem.kind == kind)
    if category_id:
        query = query.filter(ContentItem.category_id == category_id)
    if author:
        query = query.filter(ContentItem.author == author)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(ContentItem.title.ilike(pattern), ContentItem.description.ilike(pattern)))

    total = query.count()
    items = (
        query.order_by(ContentItem.created_at.desc(), ContentItem.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def count_by_status(db: Session, engine: StatusEngine, kind: ContentKind | None = None) -> dict[str, int]:
    query = db.query(ContentItem.status, func.count(ContentItem.id))
    if kind:
        query = query.filter(ContentItem.kind == kind)

    counts = {status.value: 0 for status in engine.all_statuses()}
    counts["unrecognized"] = 0
    counts["total"] = 0
    for raw, count in query.group_by(ContentItem.status).all():
        status = engine.resolve(raw)
        counts[status.value if status else "unrecognized"] += count
        counts["total"] += count
    return counts


def create_content(db: Session, payload: ContentCreate, initial_status: str) -> ContentItem:
    values = payload.model_dump()
    values["media_url"] = str(payload.media_url) if payload.media_url else None
    item = ContentItem(**values, status=initial_status)
    db.add(item)
    db.flush()
    record_audit(db, payload.author, "submit", "content", item.id, payload.model_dump(mode="json"))
    return item


def apply_status_transition(
    db: Session,
    engine: StatusEngine,
    item: ContentItem,
    target: ContentStatus,
    actor: str,
) -> ContentItem:
    from_raw = item.status
    current = engine.enforce_transition(from_raw, target)
    from_status = current.status

    item.status = target.value
    record_audit(
        db,
        actor,
        "transition",
        "content",
        item.id,
        {
            "from_raw": from_raw,
            "from_status": from_status.value if from_status else None,
            "to_status": target.value,
        },
    )
    STATUS_TRANSITION_COUNT.labels(
        from_status.value if from_status else "unrecognized", target.value
    ).inc()
    return item
