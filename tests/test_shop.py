import pytest

from weican.database import connect
from weican.restaurants import Restaurant
from weican.shop import (
    FeatureFilter,
    Role,
    SortMode,
    distance_limit,
    format_card,
    restaurant_food_ids,
    restaurant_for_owner,
    role_for,
    search_restaurants,
)


def make(
    restaurant_id,
    name="Shop",
    cuisine=1,
    distance=100.0,
    sales=10,
    grade=3.0,
    delivery_time="00:30",
    compensate=False,
    red_packet=False,
    rebate=False,
    free_shipping=False,
):
    return Restaurant(
        restaurant_id=restaurant_id,
        name=name,
        cuisine=cuisine,
        longitude="E116.35",
        latitude="N39.79",
        distance=distance,
        image_path=f"{restaurant_id}.png",
        sales=sales,
        grade=grade,
        delivery_time=delivery_time,
        owner_id="DRowner",
        compensate=compensate,
        red_packet=red_packet,
        rebate=rebate,
        free_shipping=free_shipping,
    )


@pytest.fixture
def shops():
    return [
        make("a", name="Noodle House", cuisine=1, distance=300.0, sales=100, grade=4.5,
             delivery_time="00:10", compensate=True),
        make("b", name="Dumpling Bar", cuisine=2, distance=800.0, sales=10, grade=2.0,
             delivery_time="01:00", rebate=True),
        make("c", name="Noodle King", cuisine=1, distance=2000.0, sales=50, grade=3.5,
             delivery_time="00:30", compensate=True, free_shipping=True),
    ]


@pytest.fixture
def conn():
    connection = connect(":memory:")
    yield connection
    connection.close()


def test_role_for_customer_and_merchant():
    assert role_for("user001") is Role.CUSTOMER
    assert role_for("USER001") is Role.CUSTOMER
    assert role_for("DR001") is Role.MERCHANT


def test_role_for_unknown_raises():
    with pytest.raises(ValueError):
        role_for("admin")


def test_distance_limits():
    assert distance_limit(0) == 0.0
    assert distance_limit(1) == 500.0
    assert distance_limit(5) == 10000.0


def test_distance_limit_out_of_range():
    with pytest.raises(ValueError):
        distance_limit(6)


def test_search_by_text(shops):
    result = search_restaurants(shops, text="Noodle", sort_mode=SortMode.SALES)
    assert [r.restaurant_id for r in result] == ["a", "c"]


def test_search_with_no_match_is_empty(shops):
    assert search_restaurants(shops, text="Pizza") == []


def test_cuisine_filter(shops):
    result = search_restaurants(shops, cuisine=2, sort_mode=SortMode.SCORE)
    assert [r.restaurant_id for r in result] == ["b"]


def test_distance_filter_then_sort(shops):
    result = search_restaurants(shops, distance_index=2, sort_mode=SortMode.SALES)
    assert {r.restaurant_id for r in result} == {"a", "b"}
    assert all(r.distance < 1000.0 for r in result)
    sales = [r.sales for r in result]
    assert sales == sorted(sales, reverse=True)


def test_score_sort_is_descending(shops):
    result = search_restaurants(shops, sort_mode=SortMode.SCORE)
    grades = [r.grade for r in result]
    assert grades == sorted(grades, reverse=True)
    assert len(result) == 3


def test_speed_sort(shops):
    result = search_restaurants(shops, sort_mode=SortMode.SPEED)
    assert [r.restaurant_id for r in result] == ["a", "c", "b"]


def test_smart_sort_puts_best_first(shops):
    result = search_restaurants(shops, sort_mode=SortMode.SMART)
    assert result[0].restaurant_id == "a"
    assert result[-1].restaurant_id == "b"
    assert sorted(r.restaurant_id for r in result) == ["a", "b", "c"]


def test_feature_filter(shops):
    result = search_restaurants(
        shops, sort_mode=SortMode.SALES, feature=FeatureFilter.COMPENSATE
    )
    assert {r.restaurant_id for r in result} == {"a", "c"}
    assert all(r.compensate for r in result)


def test_free_shipping_filter(shops):
    result = search_restaurants(
        shops, sort_mode=SortMode.SALES, feature=FeatureFilter.FREE_SHIPPING
    )
    assert [r.restaurant_id for r in result] == ["c"]


def test_invalid_sort_mode(shops):
    with pytest.raises(ValueError):
        search_restaurants(shops, sort_mode=9)


def test_format_card():
    card = format_card(make("x", name="Noodle House", grade=4.5, distance=500.0, sales=12,
                            delivery_time="00:20"))
    assert card["name"] == "Noodle House"
    assert card["rating"] == "4.5"
    assert card["distance"] == "500米"
    assert card["sales"] == "12"
    assert card["speed"] == "00:20"
    assert card["image_path"] == "x.png"


def test_restaurant_for_owner(conn):
    conn.execute("INSERT INTO DRinfo (DRID, DRName, Id_user) VALUES ('DR1', 'Shop', 'DRowner')")
    assert restaurant_for_owner(conn, "DRowner") == "DR1"


def test_restaurant_for_owner_missing(conn):
    with pytest.raises(KeyError):
        restaurant_for_owner(conn, "DRnobody")


def test_restaurant_food_ids(conn):
    conn.executemany(
        "INSERT INTO food (id_food, id_DR, foodname) VALUES (?, ?, ?)",
        [("f1", "DR1", "Soup"), ("f2", "DR2", "Rice"), ("f3", "DR1", "Tea")],
    )
    assert restaurant_food_ids(conn, "DR1") == ["f1", "f3"]
    assert restaurant_food_ids(conn, "DR9") == []