# models.py
import datetime
import uuid
from typing import List, Literal, Union

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field

InvoiceStatus = Literal["pending", "paid"]


class Customer(SQLModel, table=True):
  __tablename__ = "customers"

  id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
  name: str = Field(max_length=255)
  email: str = Field(max_length=255)
  image_url: str = Field(max_length=255)


class Invoice(SQLModel, table=True):
  __tablename__ = "invoices"
  __table_args__ = (
    CheckConstraint("status IN ('pending', 'paid')", name="invoices_status_check"),
  )

  id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
  customer_id: uuid.UUID = Field(foreign_key="customers.id", index=True)
  amount: int  # cents
  status: str = Field(max_length=255)  # pending|paid
  date: datetime.date = Field(index=True)


class Revenue(SQLModel, table=True):
  __tablename__ = "revenue"

  month: str = Field(primary_key=True, max_length=4)
  revenue: int


# Shapes handed to the page layer

class LatestInvoice(SQLModel):
  id: uuid.UUID
  name: str
  image_url: str
  email: str
  amount: str


class InvoicesTable(SQLModel):
  id: uuid.UUID
  customer_id: uuid.UUID
  name: str
  email: str
  image_url: str
  date: datetime.date
  amount: int
  status: InvoiceStatus


class InvoiceForm(SQLModel):
  id: uuid.UUID
  customer_id: uuid.UUID
  amount: float  # dollars
  status: InvoiceStatus


class CustomerField(SQLModel):
  id: uuid.UUID
  name: str


class CustomersTable(SQLModel):
  id: uuid.UUID
  name: str
  email: str
  image_url: str
  total_invoices: int
  total_pending: str
  total_paid: str


class CardData(SQLModel):
  number_of_customers: int
  number_of_invoices: int
  total_paid_invoices: str
  total_pending_invoices: str


class YAxis(SQLModel):
  y_axis_labels: List[str]
  top_label: int


class InvoicesPage(SQLModel):
  invoices: List[InvoicesTable]
  total_pages: int
  pagination: List[Union[int, str]]


class RevenueChart(SQLModel):
  revenue: List[Revenue]
  y_axis: YAxis
