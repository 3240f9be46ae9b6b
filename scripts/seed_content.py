import argparse
from collections import Counter

from app.db.init_db import init_db
from app.db.session import get_session_maker
from app.models.entities import Category, ContentItem, ContentKind
from app.state_machine.content_status import get_status_engine
from scripts.content_catalog import CATEGORY_CATALOG, CONTENT_CATALOG


def upsert_content(dry_run: bool = False) -> dict[str, int]:
    db = get_session_maker()()
    engine = get_status_engine()
    stats: Counter[str] = Counter()

    try:
        categories: dict[str, Category] = {}
        for item in CATEGORY_CATALOG:
            category = db.query(Category).filter(Category.name == item["name"]).one_or_none()
            if category:
                category.description = item["description"]
                stats["categories_updated"] += 1
            else:
                category = Category(name=item["name"], description=item["description"])
                db.add(category)
                stats["categories_created"] += 1
            categories[item["name"]] = category
        db.flush()

        for item in CONTENT_CATALOG:
            # Stored verbatim; legacy values are left for the resolver.
            if engine.resolve(item["status"]) is None:
                stats["unrecognized_status"] += 1

            values = {
                "kind": ContentKind(item["kind"]),
                "description": item["description"],
                "media_url": item["media_url"],
                "category_id": categories[item["category"]].id,
                "author": item["author"],
                "journal": item["journal"],
                "year": item["year"],
                "status": item["status"],
            }
            existing = db.query(ContentItem).filter(ContentItem.title == item["title"]).one_or_none()
            if existing:
                for key, value in values.items():
                    setattr(existing, key, value)
                stats["content_updated"] += 1
            else:
                db.add(ContentItem(title=item["title"], **values))
                stats["content_created"] += 1

        if dry_run:
            db.rollback()
            stats["dry_run"] = 1
        else:
            db.commit()

        return dict(stats)
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo health-education content")
    parser.add_argument("--dry-run", action="store_true", help="Validate and print changes without committing")
    args = parser.parse_args()

    init_db()
    stats = upsert_content(dry_run=args.dry_run)
    print(f"Seed completed: {stats}")


if __name__ == "__main__":
    main()
