from sqlalchemy.orm import Session

from app.models.entities import AuditLog


def record_audit(db: Session, actor: str, action: str, entity_type: str, entity_id: int, payload: dict) -> None:
    db.add(
        AuditLog(
            actor=actor,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            payload_json=payload,
        )
    )


def list_audit_entries(
    db: Session, entity_type: str, entity_id: int, action: str | None = None
) -> list[AuditLog]:
    query = db.query(AuditLog).filter(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
    if action:
        query = query.filter(AuditLog.action == action)
    return query.order_by(AuditLog.created_at.asc(), AuditLog.id.asc()).all()
