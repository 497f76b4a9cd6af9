"""Restaurant records as shown in the shop list, with distance and delivery helpers."""

import math
import re
from dataclasses import dataclass

DEFAULT_USER_LATITUDE = "N39.794502"
DEFAULT_USER_LONGITUDE = "E116.35023"

_PI = 3.141593
_SEMI_MAJOR_AXIS = 6378137
_SEMI_MINOR_AXIS = 6356755

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CLOCK = re.compile(r"\s*(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.\d+)?)?\s*")


def _leading_int(text):
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


def _leading_float(text):
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def _format_clock(value):
    """Render a stored time of day as hh:mm, or an empty string when it is not a valid time."""
    if value is None:
        return ""
    match = _CLOCK.fullmatch(str(value))
    if match is None:
        return ""
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return ""
    return f"{hours:02d}:{minutes:02d}"


def delivery_seconds(text):
    """Seconds in an hh:mm delivery time; unreadable parts count as zero."""
    return _leading_int(text[0:2]) * 3600 + _leading_int(text[3:5]) * 60


def _angle(text, positive_hemisphere):
    radians = _PI * _leading_float(text[1:]) / 180
    return radians if text[:1] == positive_hemisphere else -radians


def _plane_coordinates(latitude, longitude):
    c = _SEMI_MAJOR_AXIS**2 - _SEMI_MINOR_AXIS**2
    e = math.sqrt(c) / _SEMI_MAJOR_AXIS
    d = 1 - (e * math.sin(latitude)) ** 2
    prime_vertical = _SEMI_MAJOR_AXIS / math.sqrt(d)
    meridian = prime_vertical * (1 - e**2) / d
    parallel = prime_vertical * math.cos(latitude)
    return meridian * longitude, parallel * latitude


def distance(lat_customer, lon_customer, lat_restaurant, lon_restaurant):
    """Approximate distance in metres between two points written like "N39.79" and "E116.35"."""
    x_customer, y_customer = _plane_coordinates(
        _angle(lat_customer, "N"), _angle(lon_customer, "E")
    )
    x_restaurant, y_restaurant = _plane_coordinates(
        _angle(lat_restaurant, "N"), _angle(lon_restaurant, "E")
    )
    return math.sqrt(
        abs((x_customer - x_restaurant) ** 2 - (y_customer - y_restaurant) ** 2)
    )


def _text(value):
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Restaurant:
    """One restaurant as listed in the shop."""

    restaurant_id: str
    name: str
    cuisine: int
    longitude: str
    latitude: str
    distance: float
    image_path: str
    sales: int
    grade: float
    delivery_time: str
    owner_id: str
    compensate: bool
    red_packet: bool
    rebate: bool
    free_shipping: bool

    @classmethod
    def from_row(
        cls,
        row,
        user_latitude=DEFAULT_USER_LATITUDE,
        user_longitude=DEFAULT_USER_LONGITUDE,
    ):
        """Build a restaurant from a DRinfo row, measuring its distance from the user."""
        latitude = _text(row["latitude"])
        longitude = _text(row["longitude"])
        return cls(
            restaurant_id=_text(row["DRID"]),
            name=_text(row["DRName"]),
            cuisine=int(row["DRType"] or 0),
            longitude=longitude,
            latitude=latitude,
            distance=distance(user_latitude, user_longitude, latitude, longitude),
            image_path=_text(row["ImagePath"]),
            sales=int(row["salesVolume"] or 0),
            grade=float(row["rating"] or 0.0),
            delivery_time=_format_clock(row["speed"]),
            owner_id=_text(row["Id_user"]),
            compensate=bool(row["compensate"]),
            red_packet=bool(row["redPacket"]),
            rebate=bool(row["rebate"]),
            free_shipping=bool(row["freeShipping"]),
        )


class RestaurantList:
    """An ordered collection of restaurants with the averages used by smart ordering."""

    def __init__(self, restaurants=()):
        self._restaurants = list(restaurants)

    def __iter__(self):
        return iter(self._restaurants)

    def __len__(self):
        return len(self._restaurants)

    def _require_items(self):
        if not self._restaurants:
            raise ValueError("no restaurants to average")

    def average_sales(self):
        """Mean sales volume."""
        self._require_items()
        return sum(r.sales for r in self._restaurants) / len(self._restaurants)

    def average_score(self):
        """Mean rating."""
        self._require_items()
        return sum(r.grade for r in self._restaurants) / len(self._restaurants)

    def average_speed(self):
        """Mean delivery time in seconds."""
        self._require_items()
        total = sum(delivery_seconds(r.delivery_time) for r in self._restaurants)
        return total / len(self._restaurants)


def load_restaurants(
    conn,
    user_latitude=DEFAULT_USER_LATITUDE,
    user_longitude=DEFAULT_USER_LONGITUDE,
):
    """Every restaurant in the database, in storage order."""
    cursor = conn.execute("SELECT * FROM DRinfo ORDER BY rowid")
    columns = [column[0] for column in cursor.description]
    return RestaurantList(
        Restaurant.from_row(dict(zip(columns, row)), user_latitude, user_longitude)
        for row in cursor.fetchall()
    )