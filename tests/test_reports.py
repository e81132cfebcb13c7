from datetime import datetime
from decimal import Decimal

from canteen.crud.report import parse_date, parse_report_range
from canteen.models import Order, OrderItem, OrderStatusEnum


def _seed(session, created_at, total, status=OrderStatusEnum.completed, lines=()):
    order = Order(
        table_id="1",
        total=Decimal(str(total)),
        screenshot_url="https://img.test/s.png",
        status=status,
        created_at=created_at,
        updated_at=created_at,
        items=[
            OrderItem(item_id=item_id, name=name, price=Decimal(str(price)), qty=qty)
            for item_id, name, price, qty in lines
        ],
    )
    session.add(order)
    session.commit()
    return order


def test_report_counts_completed_orders_only(client, db_session):
    day = datetime(2025, 1, 10, 12, 0)
    _seed(db_session, day, 100, lines=[("1", "Thali", 50, 2)])
    _seed(db_session, day.replace(hour=13), 50, lines=[("2", "Tea", 25, 2)])
    _seed(db_session, day, 9999, status=OrderStatusEnum.pending, lines=[("3", "Cake", 9999, 1)])

    report = client.get("/api/reports").json()

    assert report["totalRevenue"] == 150
    assert report["ordersCount"] == 2
    assert report["byDay"] == [{"date": "2025-01-10", "total": 150.0, "orders": 2}]
    assert report["byItem"] == [
        {"itemId": "1", "name": "Thali", "qtySold": 2, "revenue": 100.0},
        {"itemId": "2", "name": "Tea", "qtySold": 2, "revenue": 50.0},
    ]


def test_report_groups_by_day_ascending(client, db_session):
    _seed(db_session, datetime(2025, 1, 12, 9, 0), 30)
    _seed(db_session, datetime(2025, 1, 11, 9, 0), 10)
    _seed(db_session, datetime(2025, 1, 11, 18, 0), 15)

    by_day = client.get("/api/reports").json()["byDay"]
    assert by_day == [
        {"date": "2025-01-11", "total": 25.0, "orders": 2},
        {"date": "2025-01-12", "total": 30.0, "orders": 1},
    ]


def test_report_sums_item_across_orders(client, db_session):
    day = datetime(2025, 2, 1, 10, 0)
    _seed(db_session, day, 40, lines=[("7", "Dosa", 20, 2)])
    _seed(db_session, day, 60, lines=[("7", "Dosa", 20, 1), ("8", "Coffee", 40, 1)])

    by_item = client.get("/api/reports").json()["byItem"]
    assert by_item == [
        {"itemId": "7", "name": "Dosa", "qtySold": 3, "revenue": 60.0},
        {"itemId": "8", "name": "Coffee", "qtySold": 1, "revenue": 40.0},
    ]


def test_report_end_date_is_inclusive(client, db_session):
    _seed(db_session, datetime(2025, 1, 31, 23, 50), 80)

    included = client.get("/api/reports", params={"to": "2025-01-31"}).json()
    excluded = client.get("/api/reports", params={"to": "2025-01-30"}).json()

    assert included["ordersCount"] == 1
    assert included["totalRevenue"] == 80
    assert excluded["ordersCount"] == 0
    assert excluded["byDay"] == []
    assert excluded["byItem"] == []


def test_report_from_date_and_invalid_bounds(client, db_session):
    _seed(db_session, datetime(2025, 3, 1, 8, 0), 10)
    _seed(db_session, datetime(2025, 3, 5, 8, 0), 20)

    r = client.get("/api/reports", params={"from": "2025-03-02"}).json()
    assert r["ordersCount"] == 1
    assert r["totalRevenue"] == 20

    r = client.get("/api/reports", params={"from": "yesterday", "to": "31/03/2025"})
    assert r.status_code == 200
    assert r.json()["ordersCount"] == 2


def test_empty_report(client):
    assert client.get("/api/reports").json() == {
        "totalRevenue": 0.0,
        "ordersCount": 0,
        "byDay": [],
        "byItem": [],
    }


def test_report_by_item_degrades_to_empty(client, db_session, monkeypatch):
    from sqlalchemy.exc import OperationalError

    import canteen.crud.report as report_crud

    _seed(db_session, datetime(2025, 1, 10, 12, 0), 100, lines=[("1", "Thali", 50, 2)])

    async def broken(*args, **kwargs):
        raise OperationalError("SELECT ...", {}, Exception("no such column"))

    monkeypatch.setattr(report_crud, "get_revenue_by_item", broken)

    r = client.get("/api/reports")
    assert r.status_code == 200
    assert r.json()["totalRevenue"] == 100
    assert r.json()["byItem"] == []


def test_report_export_csv(client, db_session):
    _seed(db_session, datetime(2025, 1, 10, 12, 0), 100, lines=[("1", "Thali", 50, 2)])

    r = client.get("/api/reports/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    lines = r.text.splitlines()
    assert lines[0] == '"Total revenue","100.0"'
    assert '"2025-01-10","100.0","1"' in lines
    assert '"1","Thali","2","100.0"' in lines


def test_parse_report_range():
    start, end = parse_report_range("2025-01-01", "2025-01-31")
    assert start == datetime(2025, 1, 1)
    assert end == datetime(2025, 1, 31, 23, 59, 59, 999000)

    assert parse_report_range(None, "") == (None, None)
    assert parse_report_range("garbage", "2025-13-01") == (None, None)


def test_parse_date_accepts_iso_datetime():
    assert parse_date("2025-01-05T10:30:00") == datetime(2025, 1, 5, 10, 30)
