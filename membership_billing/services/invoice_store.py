"""Invoice persistence: create a row, update a row by primary key, fetch by id."""
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.database import Invoice


async def create_invoice(db: AsyncSession, attributes: Dict[str, Any]) -> Invoice:
    invoice = Invoice(**attributes)
    db.add(invoice)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(invoice)
    return invoice


async def update_invoice(db: AsyncSession, attributes: Dict[str, Any], invoice_id: int) -> int:
    """Apply ``attributes`` to the invoice with ``invoice_id``.

    Returns the number of rows affected; callers decide whether anything
    other than exactly one is an error.
    """
    stmt = (
        update(Invoice)
        .where(Invoice.id == invoice_id)
        .values(**attributes)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return result.rowcount


async def get_invoice(db: AsyncSession, invoice_id: int) -> Optional[Invoice]:
    return await db.get(Invoice, invoice_id, populate_existing=True)
