import pytest

from weican.database import connect
from weican.validation import (
    SignUpForm,
    check_email,
    check_name,
    check_password,
    check_phone,
    check_real_name,
    make_user_id,
    register,
)

PASSWORD = "password" + str(1)
PHONE = "1" + "0" * 10
EMAIL = "someone@example.com"


def _form(**changes):
    fields = dict(
        username="alice",
        password=PASSWORD,
        confirm_password=PASSWORD,
        real_name="Alice",
        phone=PHONE,
        email=EMAIL,
    )
    fields.update(changes)
    return SignUpForm(**fields)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("abc12", True),
        ("abc1", False),
        ("a1" * 8, True),
        ("a1" * 8 + "b", False),
        ("abcdef", False),
        ("123456", False),
        ("ab 12!", True),
    ],
)
def test_check_password(text, expected):
    assert check_password(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        (PHONE, True),
        ("2" + "0" * 10, False),
        ("1" + "0" * 9, False),
        ("1" + "0" * 9 + "x", False),
        ("86" + PHONE, True),
        ("87" + PHONE, False),
        ("86" + "2" + "0" * 10, False),
        ("", False),
    ],
)
def test_check_phone(text, expected):
    assert check_phone(text) is expected


def test_check_name_counts_bytes():
    assert check_name("a" * 20) is True
    assert check_name("a" * 21) is False
    assert check_name("名" * 7) is False


def test_check_real_name_counts_bytes():
    assert check_real_name("a" * 12) is True
    assert check_real_name("a" * 13) is False
    assert check_real_name("名" * 4) is True
    assert check_real_name("名" * 5) is False


@pytest.mark.parametrize(
    "text, expected",
    [
        (EMAIL, True),
        ("a_b.c@example.com", True),
        ("noatsign", False),
        ("a@b@example.com", False),
        ("a..b@example.com", False),
        ("a@example.", False),
        ("@example.com", False),
        ("a@", False),
        ("a-b@example.com", False),
    ],
)
def test_check_email(text, expected):
    assert check_email(text) is expected


def test_check_email_local_part_length_limit():
    assert check_email("a" * 255 + "@example.com") is True
    assert check_email("a" * 256 + "@example.com") is False


def test_make_user_id():
    assert make_user_id(PHONE, False) == "user" + PHONE
    assert make_user_id(PHONE, True) == "DR" + PHONE


def test_valid_form_has_no_errors():
    assert _form().errors() == []


def test_form_reports_failing_fields_in_order():
    form = _form(confirm_password="password", email="", username="")
    assert form.errors() == ["username", "confirm_password", "email"]


def test_register_customer_stores_account():
    conn = connect(":memory:")
    user_id = register(conn, _form(), False)
    row = conn.execute(
        "SELECT userType, username, teleNum, mailbox, password FROM user WHERE id_user = ?",
        (user_id,),
    ).fetchone()
    assert user_id == "user" + PHONE
    assert row["userType"] == 2
    assert row["username"] == "alice"
    assert row["teleNum"] == PHONE
    assert row["mailbox"] == EMAIL
    assert row["password"] == PASSWORD


def test_register_merchant_uses_merchant_type():
    conn = connect(":memory:")
    user_id = register(conn, _form(), True)
    row = conn.execute("SELECT userType FROM user WHERE id_user = ?", (user_id,)).fetchone()
    assert user_id == "DR" + PHONE
    assert row["userType"] == 1


def test_register_twice_raises():
    conn = connect(":memory:")
    register(conn, _form(), False)
    with pytest.raises(ValueError, match="already exists"):
        register(conn, _form(), False)


def test_register_invalid_form_raises_and_stores_nothing():
    conn = connect(":memory:")
    with pytest.raises(ValueError, match="phone"):
        register(conn, _form(phone="12"), False)
    assert conn.execute("SELECT COUNT(*) FROM user").fetchone()[0] == 0