import pytest

from weican.database import connect
from weican.menu import Food, Menu


@pytest.fixture
def conn():
    connection = connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def menu(conn):
    return Menu(conn, "DR1")


def _dish(food_id="f1", name="Noodles", price=12.5):
    return Food(
        food_id=food_id,
        name=name,
        price=price,
        description="hand pulled",
        ingredient="flour",
        taste="spicy",
        volume="large",
    )


def test_add_then_get_round_trip(menu):
    dish = _dish()
    menu.add(dish)
    assert menu.get("f1") == dish


def test_add_duplicate_raises(menu):
    menu.add(_dish())
    with pytest.raises(ValueError):
        menu.add(_dish(name="Other"))


def test_get_missing_raises(menu):
    with pytest.raises(KeyError):
        menu.get("nothing")


def test_food_ids_in_storage_order_and_scoped(conn, menu):
    menu.add(_dish("b"))
    menu.add(_dish("a"))
    Menu(conn, "DR2").add(_dish("c"))
    assert menu.food_ids() == ["b", "a"]
    assert Menu(conn, "DR2").food_ids() == ["c"]


def test_other_restaurant_does_not_see_food(conn, menu):
    menu.add(_dish())
    with pytest.raises(KeyError):
        Menu(conn, "DR2").get("f1")


def test_update_changes_fields_and_keeps_counters(conn, menu):
    menu.add(_dish())
    conn.execute("UPDATE food SET sales = 7 WHERE id_food = 'f1'")
    edited = Food("f1", "Rice", 9.0, "steamed", "rice", "plain", "small")
    menu.update(edited)
    stored = menu.get("f1")
    assert stored.name == "Rice"
    assert stored.price == 9.0
    assert stored.description == "steamed"
    assert stored.taste == "plain"
    assert stored.sales == 7


def test_update_missing_raises(menu):
    with pytest.raises(KeyError):
        menu.update(_dish("ghost"))


def test_recommend_increments(menu):
    menu.add(_dish())
    assert menu.recommend("f1") == 1
    assert menu.recommend("f1") == 2
    assert menu.get("f1").recommendations == 2


def test_recommend_missing_raises(menu):
    with pytest.raises(KeyError):
        menu.recommend("ghost")


def test_cart_quantity_defaults_to_zero(menu):
    assert menu.cart_quantity("f1", "user1") == 0


def test_set_cart_quantity_round_trip(conn, menu):
    menu.set_cart_quantity("f1", "user1", 1)
    assert menu.cart_quantity("f1", "user1") == 1
    menu.set_cart_quantity("f1", "user1", 3)
    assert menu.cart_quantity("f1", "user1") == 3
    menu.set_cart_quantity("f1", "user1", 1)
    rows = conn.execute("SELECT COUNT(*) FROM cart WHERE id_food = 'f1'").fetchone()[0]
    assert rows == 1
    assert menu.cart_quantity("f1", "user1") == 1


def test_set_cart_quantity_zero_removes(conn, menu):
    menu.set_cart_quantity("f1", "user1", 2)
    menu.set_cart_quantity("f1", "user1", 0)
    assert menu.cart_quantity("f1", "user1") == 0
    assert conn.execute("SELECT COUNT(*) FROM cart").fetchone()[0] == 0


def test_set_cart_quantity_negative_raises(menu):
    with pytest.raises(ValueError):
        menu.set_cart_quantity("f1", "user1", -1)


def test_cart_quantity_is_per_user(menu):
    menu.set_cart_quantity("f1", "user1", 2)
    assert menu.cart_quantity("f1", "user2") == 0