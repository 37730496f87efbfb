from pathlib import Path

from catalog.api.deps import get_db_context
from catalog.core.db import engine, init_db
from catalog.logging_.logger import setup_logger
from catalog.services.seed import seed_catalog

script_dir = Path(__file__).resolve().parent
data_dir = script_dir.parent / "data"


def main() -> None:
    logger = setup_logger("seed")
    logger.info(f"Seeding catalog from {data_dir}")
    init_db(engine)
    with get_db_context() as session:
        counts = seed_catalog(session=session, data_dir=data_dir)
    logger.info(f"Done: {counts}")


if __name__ == "__main__":
    main()
