"""
Schema migration tool.

Creates the ``pdfs`` and ``summaries`` tables, optionally dropping them
first. Run with::

    python -m app.backend.migrate           # create missing tables
    python -m app.backend.migrate --drop    # drop and re-create
"""

import argparse
import logging
import sys

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

try:
    from .config import get_settings
    from .database import Base, make_engine
    from . import models_db  # noqa: F401  (registers tables with Base)
except ImportError:
    from config import get_settings
    from database import Base, make_engine
    import models_db  # noqa: F401

logger = logging.getLogger(__name__)

# Re-applied on PostgreSQL so databases created by older schemas get the
# cascading constraint as well.
_FOREIGN_KEY_SQL = (
    "ALTER TABLE summaries DROP CONSTRAINT IF EXISTS fk_pdfs_summaries",
    "ALTER TABLE summaries DROP CONSTRAINT IF EXISTS fk_summaries_pdf",
    "ALTER TABLE summaries ADD CONSTRAINT fk_summaries_pdf "
    "FOREIGN KEY (pdf_id) REFERENCES pdfs(id) "
    "ON UPDATE CASCADE ON DELETE CASCADE",
)


def ensure_foreign_keys(engine: Engine) -> bool:
    """
    Recreate the summaries -> pdfs cascade constraint.

    Only PostgreSQL is handled; other dialects keep the constraint
    declared on the model.

    Returns:
        True if the constraint was (re)created.
    """
    if engine.dialect.name != "postgresql":
        return False
    try:
        with engine.begin() as conn:
            for statement in _FOREIGN_KEY_SQL:
                conn.execute(text(statement))
    except SQLAlchemyError as e:
        logger.warning("Could not create/update foreign key constraint: %s", e)
        return False
    logger.info("Foreign key constraint fk_summaries_pdf in place")
    return True


def migrate(engine: Engine, drop: bool = False) -> None:
    """
    Create all tables, parents before children.

    Args:
        engine: Target database engine.
        drop: Drop existing tables first. Destroys all data.
    """
    if drop:
        logger.warning("Dropping tables: %s", ", ".join(Base.metadata.tables))
        Base.metadata.drop_all(bind=engine)

    logger.info("Creating tables...")
    Base.metadata.create_all(bind=engine)
    ensure_foreign_keys(engine)
    logger.info("Migration completed successfully")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the PDF summary database schema.")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="drop existing tables before creating them",
    )
    parser.add_argument(
        "--database-url",
        help="override DATABASE_URL from the environment",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = get_settings()
    engine = make_engine(args.database_url or settings.database_url, echo=settings.sql_debug)
    try:
        migrate(engine, drop=args.drop)
    except SQLAlchemyError as e:
        logger.error("Migration failed: %s", e)
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
