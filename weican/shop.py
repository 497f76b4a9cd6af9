"""The restaurant list of the shop page: roles, search, filters, sorting and card text."""

from enum import IntEnum

from weican.ranking import (
    compensate_only,
    free_shipping_only,
    order_by_distance,
    order_by_sales,
    order_by_score,
    order_by_speed,
    rebate_only,
    red_packet_only,
    search_by_name,
    select_cuisine,
    smart_order,
    within_distance,
)
from weican.restaurants import RestaurantList

_DISTANCE_LIMITS = (0.0, 500.0, 1000.0, 3000.0, 5000.0, 10000.0)


class Role(IntEnum):
    """Who is looking at the shop."""

    MERCHANT = 1
    CUSTOMER = 2
    RECOMMEND = 3


class SortMode(IntEnum):
    """How the restaurant list is ordered."""

    SMART = 0
    SALES = 1
    SCORE = 2
    SPEED = 3


class FeatureFilter(IntEnum):
    """Which restaurant offer the list is narrowed to."""

    NONE = 0
    COMPENSATE = 1
    REBATE = 2
    RED_PACKET = 3
    FREE_SHIPPING = 4


_FEATURE_FILTERS = {
    FeatureFilter.COMPENSATE: compensate_only,
    FeatureFilter.REBATE: rebate_only,
    FeatureFilter.RED_PACKET: red_packet_only,
    FeatureFilter.FREE_SHIPPING: free_shipping_only,
}


def role_for(user_id):
    """The role an account id stands for: customers hold "user", merchants "DR"."""
    lowered = user_id.lower()
    if "user" in lowered:
        return Role.CUSTOMER
    if "dr" in lowered:
        return Role.MERCHANT
    raise ValueError(f"cannot tell the role of account {user_id!r}")


def distance_limit(index):
    """Distance in metres chosen by the distance selector; 0 means no limit."""
    if not 0 <= index < len(_DISTANCE_LIMITS):
        raise ValueError(f"no distance choice {index}")
    return _DISTANCE_LIMITS[index]


def search_restaurants(
    restaurants,
    text="",
    cuisine=0,
    distance_index=0,
    sort_mode=SortMode.SMART,
    feature=FeatureFilter.NONE,
):
    """Apply name search, cuisine, distance, sorting and offer filter, in that order.

    Smart ordering weighs each restaurant against the averages of the whole input list.
    """
    limit = distance_limit(distance_index)
    sort_mode = SortMode(sort_mode)
    feature = FeatureFilter(feature)
    everything = RestaurantList(restaurants)
    shown = list(everything)
    if text:
        shown = search_by_name(text, shown)
    if not shown:
        return []
    shown = select_cuisine(shown, cuisine)
    if distance_index != 0:
        shown = order_by_distance(within_distance(shown, limit))
    if not shown:
        return []
    if sort_mode is SortMode.SMART:
        shown = smart_order(
            shown,
            everything.average_sales(),
            everything.average_score(),
            everything.average_speed(),
        )
    elif sort_mode is SortMode.SALES:
        shown = order_by_sales(shown)
    elif sort_mode is SortMode.SCORE:
        shown = order_by_score(shown)
    else:
        shown = order_by_speed(shown)
    if feature is not FeatureFilter.NONE:
        shown = _FEATURE_FILTERS[feature](shown)
    return list(shown)


def format_card(restaurant):
    """The texts shown on a restaurant's card in the list."""
    return {
        "restaurant_id": restaurant.restaurant_id,
        "name": restaurant.name,
        "image_path": restaurant.image_path,
        "rating": f"{restaurant.grade:g}",
        "speed": restaurant.delivery_time,
        "distance": f"{restaurant.distance:g}米",
        "sales": str(restaurant.sales),
    }


def restaurant_for_owner(conn, user_id):
    """Id of the restaurant owned by a merchant account."""
    row = conn.execute(
        "SELECT DRID FROM DRinfo WHERE Id_user = ? ORDER BY rowid", (user_id,)
    ).fetchone()
    if row is None:
        raise KeyError(f"account {user_id} owns no restaurant")
    return row[0]


def restaurant_food_ids(conn, restaurant_id):
    """Ids of the foods on a restaurant's menu, in storage order."""
    rows = conn.execute(
        "SELECT id_food FROM food WHERE id_DR = ? ORDER BY rowid", (restaurant_id,)
    ).fetchall()
    return [row[0] for row in rows]