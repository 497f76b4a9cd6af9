"""Sorting and filtering of restaurant lists for the shop page."""

from weican.restaurants import delivery_seconds


def _byte_length(text):
    return len(text.encode("utf-8"))


def _truncating_div(numerator, denominator):
    """Integer division that rounds toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def order_by_score(restaurants):
    """Restaurants from the highest rating to the lowest; ties keep their order."""
    return sorted(restaurants, key=lambda r: r.grade, reverse=True)


def order_by_distance(restaurants):
    """Restaurants from the nearest to the farthest; ties keep their order."""
    return sorted(restaurants, key=lambda r: r.distance)


def order_by_sales(restaurants):
    """Restaurants from the best selling to the least; ties keep their order."""
    return sorted(restaurants, key=lambda r: r.sales, reverse=True)


def order_by_speed(restaurants):
    """Restaurants from the fastest delivery to the slowest; ties keep their order."""
    return sorted(restaurants, key=lambda r: delivery_seconds(r.delivery_time))


def smart_order(restaurants, sales, score, speed):
    """Order by a weighted mix of sales, rating and delivery speed against the given averages.

    Sales and speed terms use whole-number arithmetic, as the weights are defined.
    """
    sales = int(sales)
    speed = int(speed)
    if sales == 0 or speed == 0 or score == 0:
        raise ValueError("averages used for smart ordering must not be zero")

    def weight(restaurant):
        sales_part = _truncating_div(restaurant.sales * 40, sales)
        score_part = restaurant.grade * 40 / score
        speed_part = _truncating_div(
            (delivery_seconds(restaurant.delivery_time) - speed) * -20, speed
        )
        return sales_part + score_part + speed_part

    return sorted(restaurants, key=weight, reverse=True)


def check_string(first, second):
    """True when the shorter of the two strings occurs within the longer one."""
    if _byte_length(first) > _byte_length(second):
        return second in first
    return first in second


def search_by_name(query, restaurants):
    """Restaurants whose name and the query contain one another, in list order."""
    return [r for r in restaurants if check_string(r.name, query)]


def _collect(restaurants, predicate):
    """Matching restaurants: the first match, then the remaining matches newest first."""
    matches = [r for r in restaurants if predicate(r)]
    if not matches:
        return []
    return [matches[0], *reversed(matches[1:])]


def select_cuisine(restaurants, cuisine):
    """Restaurants of one cuisine; cuisine 0 keeps every restaurant."""
    restaurants = list(restaurants)
    if cuisine == 0:
        return restaurants
    return _collect(restaurants, lambda r: r.cuisine == cuisine)


def within_distance(restaurants, limit):
    """Restaurants closer than *limit* metres; a limit of 0 keeps every restaurant."""
    restaurants = list(restaurants)
    if limit == 0.0:
        return restaurants
    return _collect(restaurants, lambda r: r.distance < limit)


def compensate_only(restaurants):
    """Restaurants that compensate late deliveries."""
    return _collect(restaurants, lambda r: r.compensate)


def rebate_only(restaurants):
    """Restaurants that give coupons back after a purchase."""
    return _collect(restaurants, lambda r: r.rebate)


def red_packet_only(restaurants):
    """Restaurants that offer red packets."""
    return _collect(restaurants, lambda r: r.red_packet)


def free_shipping_only(restaurants):
    """Restaurants that deliver for free."""
    return _collect(restaurants, lambda r: r.free_shipping)