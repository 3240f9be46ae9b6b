from app.models.entities import AuditLog, Category, ContentItem, ContentKind, IdempotencyKey

__all__ = ["AuditLog", "Category", "ContentItem", "ContentKind", "IdempotencyKey"]
