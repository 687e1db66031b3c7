"""Database URL helpers shared by the runtime engine and Alembic."""

_SYNC_DRIVERS = (
    ("postgresql+asyncpg://", "postgresql+psycopg://"),
    ("postgresql://", "postgresql+psycopg://"),
    ("postgres://", "postgresql+psycopg://"),
    ("sqlite+aiosqlite://", "sqlite://"),
)


def sync_database_url(url: str) -> str:
    """Return a URL Alembic can use synchronously.

    Postgres always goes through psycopg (v3), which is installed alongside
    asyncpg; a bare ``postgresql://`` would otherwise select psycopg2.
    """
    for prefix, replacement in _SYNC_DRIVERS:
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


__all__ = ["sync_database_url"]
