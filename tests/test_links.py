from urllib.parse import unquote

import pytest

from canteen.services.links import build_outgoing_url, build_qr_image_url, next_table_number

BASE = "https://canteen.example"
QR_TEMPLATE = "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data={data}&format=png"


def test_placeholder_is_replaced_everywhere():
    assert build_outgoing_url("7", "https://x.test/{table}", BASE) == "https://x.test/7"
    assert build_outgoing_url("7", "/t/{table}?again={table}", BASE) == "/t/7?again=7"


def test_absolute_link_used_verbatim():
    assert build_outgoing_url("2", "  HTTPS://pay.example/menu  ", BASE) == "HTTPS://pay.example/menu"


@pytest.mark.parametrize("link", ["menu/vip", "/menu/vip"])
def test_relative_link_joined_with_single_slash(link):
    assert build_outgoing_url("2", link, BASE + "/") == "https://canteen.example/menu/vip"


def test_empty_link_falls_back_to_order_page():
    assert build_outgoing_url("3", "", BASE) == "https://canteen.example/order/3"
    assert build_outgoing_url("3", None, BASE) == "https://canteen.example/order/3"


def test_qr_url_encodes_outgoing_like_encode_uri_component():
    qr = build_qr_image_url("https://x.test/order/7?a=1&b=(2)", QR_TEMPLATE)
    assert qr.startswith("https://api.qrserver.com/v1/create-qr-code/?size=300x300&data=")
    assert qr.endswith("&format=png")
    data = qr.split("data=", 1)[1].rsplit("&format=", 1)[0]
    assert data == "https%3A%2F%2Fx.test%2Forder%2F7%3Fa%3D1%26b%3D(2)"
    assert unquote(data) == "https://x.test/order/7?a=1&b=(2)"


def test_next_number_skips_non_numeric():
    assert next_table_number(["2", "5", "abc"]) == "6"


def test_next_number_for_no_tables():
    assert next_table_number([]) == "1"


def test_next_number_strips_non_digits():
    assert next_table_number(["T-9", "table 10"]) == "11"


def test_next_number_falls_back_to_count():
    assert next_table_number(["vip", "terrace"]) == "3"


def test_next_number_ignores_numbers_too_long_to_convert():
    assert next_table_number(["9" * 5000, "4"]) == "5"
