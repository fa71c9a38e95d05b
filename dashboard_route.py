# dashboard_route.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncEngine

import data
from db import get_engine
from models import (
  CardData,
  CustomerField,
  CustomersTable,
  InvoiceForm,
  InvoicesPage,
  LatestInvoice,
  Revenue,
  RevenueChart,
)
from seed import seed_if_empty
from utils import generate_pagination, generate_y_axis

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/revenue", response_model=List[Revenue])
async def list_revenue(engine: AsyncEngine = Depends(get_engine)):
  return await data.fetch_revenue(engine)


@router.get("/revenue/chart", response_model=RevenueChart)
async def revenue_chart(engine: AsyncEngine = Depends(get_engine)):
  revenue = await data.fetch_revenue(engine)
  return RevenueChart(revenue=revenue, y_axis=generate_y_axis(revenue))


@router.get("/cards", response_model=CardData)
async def card_data(engine: AsyncEngine = Depends(get_engine)):
  return await data.fetch_card_data(engine)


@router.get("/invoices/latest", response_model=List[LatestInvoice])
async def latest_invoices(engine: AsyncEngine = Depends(get_engine)):
  return await data.fetch_latest_invoices(engine)


@router.get("/invoices", response_model=InvoicesPage)
async def list_invoices(
  query: str = "",
  page: int = Query(default=1, ge=1),
  engine: AsyncEngine = Depends(get_engine),
):
  invoices = await data.fetch_filtered_invoices(engine, query, page)
  total_pages = await data.fetch_invoices_pages(engine, query)
  return InvoicesPage(
    invoices=invoices,
    total_pages=total_pages,
    pagination=generate_pagination(page, total_pages),
  )


@router.get("/invoices/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(invoice_id: str, engine: AsyncEngine = Depends(get_engine)):
  invoice = await data.fetch_invoice_by_id(engine, invoice_id)
  if not invoice:
    raise HTTPException(status_code=404, detail="Invoice not found")
  return invoice


@router.get("/customers", response_model=List[CustomerField])
async def list_customers(engine: AsyncEngine = Depends(get_engine)):
  return await data.fetch_customers(engine)


@router.get("/customers/table", response_model=List[CustomersTable])
async def customers_table(query: str = "", engine: AsyncEngine = Depends(get_engine)):
  return await data.fetch_filtered_customers(engine, query)


@router.post("/seed")
async def seed(engine: AsyncEngine = Depends(get_engine)):
  seeded = await seed_if_empty(engine)
  return {"ok": True, "seeded": seeded}
