"""Checks applied to the sign-up form and creation of new accounts."""

import re
import sqlite3
from dataclasses import dataclass

USER_PREFIX = "user"
MERCHANT_PREFIX = "DR"
USER_TYPE_CUSTOMER = 2
USER_TYPE_MERCHANT = 1

_EMAIL_PART = re.compile(r"[A-Za-z0-9_]+(?:\.[A-Za-z0-9_]+)*")


def _byte_length(text):
    return len(text.encode("utf-8"))


def _is_ascii_letter(char):
    return "a" <= char <= "z" or "A" <= char <= "Z"


def check_password(text):
    """True when the password is 5 to 16 bytes and holds a letter and a digit."""
    if not 5 <= _byte_length(text) <= 16:
        return False
    has_letter = any(_is_ascii_letter(c) for c in text)
    has_digit = any("0" <= c <= "9" for c in text)
    return has_letter and has_digit


def check_phone(text):
    """True for an 11-digit number starting with 1, or a 13-digit one with an 86 prefix."""
    if not all("0" <= c <= "9" for c in text):
        return False
    if len(text) == 11:
        return text[0] == "1"
    if len(text) == 13:
        return "86" in text and text[2] == "1"
    return False


def check_name(name):
    """True when the user name fits in 20 bytes."""
    return _byte_length(name) <= 20


def check_real_name(name):
    """True when the real name fits in 12 bytes."""
    return _byte_length(name) <= 12


def check_email(text):
    """True for local@domain where both sides are dot-separated word runs."""
    local, at, domain = text.partition("@")
    if not at:
        return False
    return (
        _EMAIL_PART.fullmatch(domain) is not None
        and _EMAIL_PART.fullmatch(local) is not None
        and _byte_length(local) < 256
    )


def make_user_id(phone, merchant=False):
    """Account id built from the phone number and the account kind."""
    return (MERCHANT_PREFIX if merchant else USER_PREFIX) + phone


@dataclass
class SignUpForm:
    """The fields a new user fills in."""

    username: str
    password: str
    confirm_password: str
    real_name: str
    phone: str
    email: str

    def errors(self):
        """Names of the fields that do not pass their check, in form order."""
        checks = [
            ("username", bool(self.username) and check_name(self.username)),
            ("password", bool(self.password) and check_password(self.password)),
            (
                "confirm_password",
                bool(self.confirm_password) and self.confirm_password == self.password,
            ),
            ("real_name", bool(self.real_name) and check_real_name(self.real_name)),
            ("phone", check_phone(self.phone)),
            ("email", bool(self.email) and check_email(self.email)),
        ]
        return [name for name, ok in checks if not ok]


def register(conn, form, merchant=False):
    """Store a new account for a valid form and return its id."""
    problems = form.errors()
    if problems:
        raise ValueError("invalid sign-up fields: " + ", ".join(problems))
    user_id = make_user_id(form.phone, merchant)
    user_type = USER_TYPE_MERCHANT if merchant else USER_TYPE_CUSTOMER
    try:
        with conn:
            conn.execute(
                "INSERT INTO user (id_user, userType, username, realname, password, teleNum, mailbox) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    user_id,
                    user_type,
                    form.username,
                    form.real_name,
                    form.password,
                    form.phone,
                    form.email,
                ),
            )
    except sqlite3.IntegrityError as exc:
        raise ValueError(f"account {user_id} already exists") from exc
    return user_id