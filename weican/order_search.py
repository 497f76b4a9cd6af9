"""Listing and searching a user's or a restaurant's orders."""

from datetime import timedelta
from enum import IntEnum

from weican.shop import Role, restaurant_for_owner

_RANGE_DAYS = (3, 7, 30, 90, 365)


class OrderFilter(IntEnum):
    """Which orders a search keeps, by their state."""

    ALL = 0
    AWAITING_PAYMENT = 1
    AWAITING_RECEIPT = 2
    RECEIVED = 3
    FINISHED = 4
    CANCELLED = 5

    @property
    def condition(self):
        return _FILTER_CONDITIONS[self]


_FILTER_CONDITIONS = {
    OrderFilter.ALL: "",
    OrderFilter.AWAITING_PAYMENT: "OrderPayCondition = 0 AND OrderCancelCondition = 0",
    OrderFilter.AWAITING_RECEIPT: "OrderPayCondition = 1 AND OrderReceiveCondition = 0",
    OrderFilter.RECEIVED: (
        "OrderPayCondition = 1 AND OrderReceiveCondition = 1 AND OrderFinishCondition = 0"
    ),
    OrderFilter.FINISHED: "OrderFinishCondition = 1",
    OrderFilter.CANCELLED: "OrderCancelCondition = 1",
}


class MerchantSort(IntEnum):
    """How a merchant's search results are ordered, always descending."""

    RATING = 0
    PRICE = 1
    RECEIVE_TIME = 2
    PAY_TIME = 3

    @property
    def column(self):
        return _SORT_COLUMNS[self]


_SORT_COLUMNS = {
    MerchantSort.RATING: "rating",
    MerchantSort.PRICE: "price",
    MerchantSort.RECEIVE_TIME: "OrderReceiveTime",
    MerchantSort.PAY_TIME: "OrderPayTime",
}


def time_range(index, end):
    """Start and end of the period picked by the range selector, ending at *end*."""
    if not 0 <= index < len(_RANGE_DAYS):
        raise ValueError(f"no time range choice {index}")
    return end - timedelta(days=_RANGE_DAYS[index]), end


def _checked_role(role):
    role = Role(role)
    if role not in (Role.MERCHANT, Role.CUSTOMER):
        raise ValueError(f"orders cannot be searched as {role.name.lower()}")
    return role


def build_search_query(role, owner_id, status_filter, start, end, sort=MerchantSort.RATING):
    """SQL and parameters for an order search.

    *owner_id* is the restaurant id for merchants and the account id for customers.
    Merchants filter on the pay time and choose the order; customers filter on the
    creation time and see the newest first.
    """
    role = _checked_role(role)
    status_filter = OrderFilter(status_filter)
    if role is Role.MERCHANT:
        sql = "SELECT orderid FROM orders WHERE Id_DR = ?"
        time_column = "OrderPayTime"
        order_column = MerchantSort(sort).column
    else:
        sql = "SELECT orderid FROM orders WHERE Id_user = ?"
        time_column = "OrderCreateTime"
        order_column = "OrderCreateTime"
    if status_filter.condition:
        sql += " AND " + status_filter.condition
    sql += f" AND {time_column} BETWEEN ? AND ?"
    sql += f" ORDER BY {order_column} DESC, orderid DESC"
    params = (owner_id, start.strftime("%Y-%m-%d"), end.strftime("%Y-%m-%d"))
    return sql, params


def list_order_ids(conn, user_id, role):
    """All orders of a customer, newest first, or of a merchant's restaurant, latest paid first."""
    role = _checked_role(role)
    if role is Role.MERCHANT:
        restaurant_id = restaurant_for_owner(conn, user_id)
        rows = conn.execute(
            "SELECT orderid FROM orders WHERE Id_DR = ? ORDER BY OrderPayTime DESC, orderid DESC",
            (restaurant_id,),
        ).fetchall()
    else:
        rows = conn.execute(
            "SELECT orderid FROM orders WHERE Id_user = ? "
            "ORDER BY OrderCreateTime DESC, orderid DESC",
            (user_id,),
        ).fetchall()
    return [row[0] for row in rows]


def search_order_ids(conn, user_id, role, status_filter, start, end, sort=MerchantSort.RATING):
    """Ids of the orders matching a search made by *user_id*."""
    role = _checked_role(role)
    owner_id = restaurant_for_owner(conn, user_id) if role is Role.MERCHANT else user_id
    sql, params = build_search_query(role, owner_id, status_filter, start, end, sort)
    return [row[0] for row in conn.execute(sql, params).fetchall()]