from urllib.parse import quote


def test_create_and_list_tables_with_links(client):
    r = client.post("/api/tables", json={"number": " 7 ", "link": "https://x.test/{table}"})
    assert r.status_code == 201
    table = r.json()
    assert table["number"] == "7"
    assert table["outgoing"] == "https://x.test/7"
    assert table["qr"] == (
        "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data="
        + quote("https://x.test/7", safe="")
        + "&format=png"
    )

    plain = client.post("/api/tables", json={"number": "3"}).json()
    assert plain["link"] == ""
    assert plain["outgoing"] == "http://canteen.test/order/3"

    listed = client.get("/api/tables").json()
    assert {t["id"] for t in listed} == {table["id"], plain["id"]}
    assert all("outgoing" in t and "qr" in t for t in listed)


def test_create_table_rejects_blank_number(client):
    assert client.post("/api/tables", json={"number": "   "}).status_code == 400


def test_create_table_auto_numbers(client):
    assert client.get("/api/tables/next-number").json() == {"number": "1"}

    for number in ("2", "5", "abc"):
        client.post("/api/tables", json={"number": number})
    assert client.get("/api/tables/next-number").json() == {"number": "6"}

    r = client.post("/api/tables", json={})
    assert r.status_code == 201
    assert r.json()["number"] == "6"


def test_delete_table(client):
    table = client.post("/api/tables", json={"number": "1"}).json()

    r = client.delete(f"/api/tables/{table['id']}")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert client.delete(f"/api/tables/{table['id']}").status_code == 404
    assert client.get("/api/tables").json() == []


def test_create_table_rejects_overlong_number(client):
    assert client.post("/api/tables", json={"number": "9" * 5000}).status_code == 400
    assert client.post("/api/tables", json={"number": "1", "link": "x" * 513}).status_code == 400
    assert client.get("/api/tables/next-number").json() == {"number": "1"}
