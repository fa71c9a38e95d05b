# seed.py
import datetime
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from db import init_db
from models import Customer, Invoice, Revenue

logger = logging.getLogger(__name__)

CUSTOMERS = [
  {
    "id": uuid.UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"),
    "name": "Evil Rabbit",
    "email": "evil@rabbit.com",
    "image_url": "/customers/evil-rabbit.png",
  },
  {
    "id": uuid.UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a"),
    "name": "Delba de Oliveira",
    "email": "delba@oliveira.com",
    "image_url": "/customers/delba-de-oliveira.png",
  },
  {
    "id": uuid.UUID("3958dc9e-742f-4377-85e9-fec4b6a6442a"),
    "name": "Lee Robinson",
    "email": "lee@robinson.com",
    "image_url": "/customers/lee-robinson.png",
  },
  {
    "id": uuid.UUID("76d65c26-f784-44a2-ac19-586678f7c2f2"),
    "name": "Michael Novotny",
    "email": "michael@novotny.com",
    "image_url": "/customers/michael-novotny.png",
  },
  {
    "id": uuid.UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9"),
    "name": "Amy Burns",
    "email": "amy@burns.com",
    "image_url": "/customers/amy-burns.png",
  },
  {
    "id": uuid.UUID("13d07535-c59e-4157-a011-f8d2ef4e0cbb"),
    "name": "Balazs Orban",
    "email": "balazs@orban.com",
    "image_url": "/customers/balazs-orban.png",
  },
]

# (customer index, amount in cents, status, date)
INVOICES = [
  (0, 15795, "pending", "2022-12-06"),
  (1, 20348, "pending", "2022-11-14"),
  (4, 3040, "paid", "2022-10-29"),
  (3, 44800, "paid", "2023-09-10"),
  (5, 34577, "pending", "2023-08-05"),
  (2, 54246, "pending", "2023-07-16"),
  (0, 666, "pending", "2023-06-27"),
  (3, 32545, "paid", "2023-06-09"),
  (4, 1250, "paid", "2023-06-17"),
  (5, 8546, "paid", "2023-06-07"),
  (1, 500, "paid", "2023-08-19"),
  (5, 8945, "paid", "2023-06-03"),
  (2, 1000, "paid", "2022-06-05"),
]

REVENUE = [
  ("Jan", 2000),
  ("Feb", 1800),
  ("Mar", 2200),
  ("Apr", 2500),
  ("May", 2300),
  ("Jun", 3200),
  ("Jul", 3500),
  ("Aug", 3700),
  ("Sep", 2500),
  ("Oct", 2800),
  ("Nov", 3000),
  ("Dec", 4800),
]


async def seed_if_empty(engine: AsyncEngine) -> bool:
  await init_db(engine)

  async with AsyncSession(engine) as session:
    # Seed only if DB is empty
    any_invoice = (await session.exec(select(Invoice))).first()
    if any_invoice:
      return False

    session.add_all([Customer(**c) for c in CUSTOMERS])
    await session.flush()
    session.add_all([
      Invoice(
        customer_id=CUSTOMERS[idx]["id"],
        amount=amount,
        status=status,
        date=datetime.date.fromisoformat(day),
      )
      for idx, amount, status, day in INVOICES
    ])
    session.add_all([Revenue(month=m, revenue=r) for m, r in REVENUE])
    await session.commit()

  logger.info("Seeded %d customers, %d invoices, %d revenue rows", len(CUSTOMERS), len(INVOICES), len(REVENUE))
  return True
