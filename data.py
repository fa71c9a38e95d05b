# data.py
import asyncio
import logging
import math
import uuid
from typing import List, Optional

from sqlalchemy import String, case, cast, func, or_
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select

from models import (
  CardData,
  Customer,
  CustomerField,
  CustomersTable,
  Invoice,
  InvoiceForm,
  InvoicesTable,
  LatestInvoice,
  Revenue,
)
from utils import format_currency

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6


class DataFetchError(RuntimeError):
  """A query failed; the message is safe to show, the cause is chained."""


async def _fetch_all(engine: AsyncEngine, stmt) -> list:
  async with engine.connect() as conn:
    result = await conn.execute(stmt)
    return [dict(r) for r in result.mappings().all()]


async def _fetch_scalar(engine: AsyncEngine, stmt):
  async with engine.connect() as conn:
    result = await conn.execute(stmt)
    return result.scalar()


async def _gather_all(*coros) -> list:
  # like gather, but a failure cancels and waits out the siblings
  tasks = [asyncio.ensure_future(c) for c in coros]
  try:
    return await asyncio.gather(*tasks)
  except BaseException:
    for t in tasks:
      t.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    raise


def _pattern(query: str) -> str:
  return f"%{query or ''}%"


def _invoice_search(query: str):
  q = _pattern(query)
  return or_(
    Customer.name.ilike(q),
    Customer.email.ilike(q),
    cast(Invoice.amount, String).ilike(q),
    cast(Invoice.date, String).ilike(q),
    Invoice.status.ilike(q),
  )


async def fetch_revenue(engine: AsyncEngine) -> List[Revenue]:
  try:
    rows = await _fetch_all(engine, select(Revenue.month, Revenue.revenue))
    return [Revenue(**r) for r in rows]
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch revenue data.") from err


async def fetch_latest_invoices(engine: AsyncEngine) -> List[LatestInvoice]:
  stmt = (
    select(Invoice.amount, Customer.name, Customer.image_url, Customer.email, Invoice.id)
    .join(Customer, Invoice.customer_id == Customer.id)
    .order_by(Invoice.date.desc(), Invoice.id)
    .limit(5)
  )
  try:
    rows = await _fetch_all(engine, stmt)
    return [LatestInvoice(**{**r, "amount": format_currency(r["amount"])}) for r in rows]
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch the latest invoices.") from err


async def fetch_card_data(engine: AsyncEngine) -> CardData:
  invoice_count = select(func.count()).select_from(Invoice)
  customer_count = select(func.count()).select_from(Customer)
  invoice_status = select(
    func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)).label("paid"),
    func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)).label("pending"),
  )

  try:
    # independent aggregates, one connection each
    number_of_invoices, number_of_customers, status_rows = await _gather_all(
      _fetch_scalar(engine, invoice_count),
      _fetch_scalar(engine, customer_count),
      _fetch_all(engine, invoice_status),
    )
    totals = status_rows[0] if status_rows else {}

    return CardData(
      number_of_customers=int(number_of_customers or 0),
      number_of_invoices=int(number_of_invoices or 0),
      total_paid_invoices=format_currency(totals.get("paid") or 0),
      total_pending_invoices=format_currency(totals.get("pending") or 0),
    )
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch card data.") from err


async def fetch_filtered_invoices(engine: AsyncEngine, query: str, current_page: int) -> List[InvoicesTable]:
  offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE

  stmt = (
    select(
      Invoice.id,
      Invoice.customer_id,
      Invoice.amount,
      Invoice.date,
      Invoice.status,
      Customer.name,
      Customer.email,
      Customer.image_url,
    )
    .join(Customer, Invoice.customer_id == Customer.id)
    .where(_invoice_search(query))
    # id breaks ties between invoices on the same date
    .order_by(Invoice.date.desc(), Invoice.id)
    .limit(ITEMS_PER_PAGE)
    .offset(offset)
  )
  try:
    rows = await _fetch_all(engine, stmt)
    return [InvoicesTable(**r) for r in rows]
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch invoices.") from err


async def fetch_invoices_pages(engine: AsyncEngine, query: str) -> int:
  stmt = (
    select(func.count())
    .select_from(Invoice)
    .join(Customer, Invoice.customer_id == Customer.id)
    .where(_invoice_search(query))
  )
  try:
    count = await _fetch_scalar(engine, stmt)
    return math.ceil(int(count or 0) / ITEMS_PER_PAGE)
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch total number of invoices.") from err


async def fetch_invoice_by_id(engine: AsyncEngine, invoice_id: str) -> Optional[InvoiceForm]:
  try:
    key = invoice_id if isinstance(invoice_id, uuid.UUID) else uuid.UUID(str(invoice_id))
    stmt = (
      select(Invoice.id, Invoice.customer_id, Invoice.amount, Invoice.status)
      .where(Invoice.id == key)
    )
    rows = await _fetch_all(engine, stmt)
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch invoice.") from err

  if not rows:
    return None
  row = rows[0]
  # cents -> dollars
  return InvoiceForm(**{**row, "amount": row["amount"] / 100})


async def fetch_customers(engine: AsyncEngine) -> List[CustomerField]:
  stmt = select(Customer.id, Customer.name).order_by(Customer.name.asc())
  try:
    rows = await _fetch_all(engine, stmt)
    return [CustomerField(**r) for r in rows]
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch all customers.") from err


async def fetch_filtered_customers(engine: AsyncEngine, query: str) -> List[CustomersTable]:
  q = _pattern(query)
  stmt = (
    select(
      Customer.id,
      Customer.name,
      Customer.email,
      Customer.image_url,
      func.count(Invoice.id).label("total_invoices"),
      func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)).label("total_pending"),
      func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)).label("total_paid"),
    )
    .join(Invoice, Customer.id == Invoice.customer_id, isouter=True)
    .where(or_(Customer.name.ilike(q), Customer.email.ilike(q)))
    .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
    .order_by(Customer.name.asc())
  )
  try:
    rows = await _fetch_all(engine, stmt)
    return [
      CustomersTable(
        **{
          **r,
          "total_pending": format_currency(r["total_pending"] or 0),
          "total_paid": format_currency(r["total_paid"] or 0),
        }
      )
      for r in rows
    ]
  except Exception as err:
    logger.exception("Database Error: %s", err)
    raise DataFetchError("Failed to fetch customer table.") from err
