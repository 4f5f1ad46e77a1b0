"""Create all tables directly from the ORM metadata, bypassing migrations."""
import logging

from mediaroom.core.settings import settings
from mediaroom.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    logger.info("Database initialized at %s", settings.effective_database_url)
