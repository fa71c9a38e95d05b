import uuid


def test_health(client):
  r = client.get("/health")
  assert r.status_code == 200
  assert r.json() == {"ok": True, "database": True}


def test_seed_is_idempotent(client):
  r = client.post("/api/seed")
  assert r.status_code == 200
  assert r.json() == {"ok": True, "seeded": False}
  assert client.get("/api/cards").json()["number_of_invoices"] == 13


def test_cards(client):
  r = client.get("/api/cards")
  assert r.status_code == 200
  assert r.json() == {
    "number_of_customers": 6,
    "number_of_invoices": 13,
    "total_paid_invoices": "$1,006.26",
    "total_pending_invoices": "$1,256.32",
  }


def test_revenue_chart(client):
  r = client.get("/api/revenue/chart")
  assert r.status_code == 200
  body = r.json()
  assert len(body["revenue"]) == 12
  assert body["y_axis"]["top_label"] == 5000
  assert body["y_axis"]["y_axis_labels"][0] == "$5K"
  assert body["y_axis"]["y_axis_labels"][-1] == "$0K"


def test_latest_invoices(client):
  r = client.get("/api/invoices/latest")
  assert r.status_code == 200
  latest = r.json()
  assert len(latest) == 5
  assert latest[0]["name"] == "Michael Novotny"
  assert latest[0]["amount"] == "$448.00"


def test_invoices_page_with_pagination_window(client):
  r = client.get("/api/invoices", params={"query": "", "page": 2})
  assert r.status_code == 200
  body = r.json()
  assert len(body["invoices"]) == 6
  assert body["total_pages"] == 3
  assert body["pagination"] == [1, 2, 3]

  r = client.get("/api/invoices", params={"query": "paid"})
  body = r.json()
  assert body["total_pages"] == 2
  assert all(i["status"] == "paid" for i in body["invoices"])


def test_invoices_rejects_page_zero(client):
  r = client.get("/api/invoices", params={"page": 0})
  assert r.status_code == 422


def test_invoice_by_id(client):
  [row] = client.get("/api/invoices", params={"query": "44800"}).json()["invoices"]
  r = client.get(f"/api/invoices/{row['id']}")
  assert r.status_code == 200
  assert r.json()["amount"] == 448.0
  assert r.json()["status"] == "paid"

  r = client.get(f"/api/invoices/{uuid.uuid4()}")
  assert r.status_code == 404
  assert r.json()["detail"] == "Invoice not found"


def test_malformed_invoice_id_is_a_failed_fetch(client):
  r = client.get("/api/invoices/not-a-uuid")
  assert r.status_code == 500
  assert r.json() == {"detail": "Failed to fetch invoice."}


def test_customers(client):
  r = client.get("/api/customers")
  assert r.status_code == 200
  names = [c["name"] for c in r.json()]
  assert names[0] == "Amy Burns"
  assert set(r.json()[0]) == {"id", "name"}

  r = client.get("/api/customers/table", params={"query": "lee"})
  assert r.status_code == 200
  [lee] = r.json()
  assert lee["total_invoices"] == 2
  assert lee["total_pending"] == "$542.46"
  assert lee["total_paid"] == "$10.00"
