import argparse

from app.db.session import get_session_maker
from app.services.idempotency import cleanup_expired_keys


def main() -> None:
    parser = argparse.ArgumentParser(description="Delete idempotency keys older than IDEMPOTENCY_TTL_HOURS")
    parser.add_argument("--dry-run", action="store_true", help="Count expired keys without deleting them")
    args = parser.parse_args()

    db = get_session_maker()()
    try:
        deleted = cleanup_expired_keys(db)
        if args.dry_run:
            db.rollback()
        else:
            db.commit()
    finally:
        db.close()
    print(f"Expired idempotency keys: {deleted}{' (dry run)' if args.dry_run else ''}")


if __name__ == "__main__":
    main()
