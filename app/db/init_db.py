from sqlalchemy.engine import Engine

from app.db.base import Base
from app.db.session import get_engine
from app import models  # noqa: F401


def init_db(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())
