"""Run Alembic migrations programmatically before the service starts.

Usage:
    python run_migrations.py
"""
from alembic.config import Config
from alembic import command
import logging
import os

from membership_billing.config.logsetup import configure_logging

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ALEMBIC_INI = os.path.join(BASE_DIR, 'alembic.ini')

logger = logging.getLogger("migrations")


def run(revision: str = 'head'):
    cfg = Config(ALEMBIC_INI)
    cfg.set_main_option('script_location', os.path.join(BASE_DIR, 'alembic'))
    override = os.getenv('DB_URL') or os.getenv('DATABASE_URL')
    if override:
        cfg.set_main_option('sqlalchemy.url', override)
    logger.info("Upgrading database schema to %s", revision)
    command.upgrade(cfg, revision)


if __name__ == '__main__':
    configure_logging()
    run()
