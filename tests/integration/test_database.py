import pytest

from membership_billing.config.database import (
    async_engine,
    check_async_database_connection,
    create_database_tables,
    drop_database_tables,
    get_async_db,
)
from membership_billing.services.invoice_service import create_empty_invoice

pytestmark = [pytest.mark.integration]


@pytest.mark.asyncio
async def test_session_factory_round_trip():
    await drop_database_tables()
    await create_database_tables()
    try:
        assert await check_async_database_connection() is True
        async with get_async_db() as db:
            invoice = await create_empty_invoice(db, "watson@holmes.co.uk", "full")
        assert invoice.reference == f"FUL{invoice.id}"
    finally:
        await drop_database_tables()
        await async_engine.dispose()
