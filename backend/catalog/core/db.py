from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from catalog.core.config import settings

# Register all tables on the metadata before create_all
from catalog.models import Director, Genre, Movie  # noqa: F401

engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI), pool_pre_ping=True)


def init_db(db_engine: Engine) -> None:
    """
    Create all tables that do not exist yet. Schema changes of existing
    tables are not handled here.
    """
    SQLModel.metadata.create_all(db_engine)
