"""Rating finished orders and reading restaurant comments."""

from dataclasses import dataclass
from datetime import datetime

from weican.database import TIMESTAMP_FORMAT


@dataclass(frozen=True)
class Comment:
    """A customer's comment on one order."""

    comment_id: int
    content: str
    order_id: int
    user_id: str
    time: str
    grade: int
    restaurant_id: str


def add_comment(conn, order_id, user_id, restaurant_id, content, grade, now=None):
    """Record a comment, finish the order and update food and restaurant statistics."""
    moment = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    with conn:
        conn.execute("UPDATE orders SET rating = ? WHERE orderid = ?", (grade, order_id))
        cursor = conn.execute(
            "INSERT INTO comment (contentment, Id_order, Id_user, commentTime, grade, Id_DR) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (content, order_id, user_id, moment, grade, restaurant_id),
        )
        comment_id = cursor.lastrowid
        conn.execute(
            "UPDATE orders SET OrderFinishTime = ?, OrderFinishCondition = 1 WHERE orderid = ?",
            (moment, order_id),
        )
        lines = conn.execute(
            "SELECT Id_food, number FROM ordertofood WHERE Id_order = ?", (order_id,)
        ).fetchall()
        for food_id, number in lines:
            conn.execute(
                "UPDATE food SET sales = sales + ? WHERE id_food = ? AND id_DR = ?",
                (number, food_id, restaurant_id),
            )
            conn.execute(
                "UPDATE DRinfo SET salesVolume = salesVolume + ? WHERE DRID = ?",
                (number, restaurant_id),
            )
        total, count = conn.execute(
            "SELECT SUM(grade), COUNT(*) FROM comment WHERE Id_DR = ?", (restaurant_id,)
        ).fetchone()
        conn.execute(
            "UPDATE DRinfo SET rating = ?, salesNum = salesNum + 1 WHERE DRID = ?",
            (total / count, restaurant_id),
        )
    return Comment(comment_id, content, order_id, user_id, moment, grade, restaurant_id)


def list_comments(conn, restaurant_id):
    """Comments on a restaurant, oldest first."""
    rows = conn.execute(
        "SELECT Id_comment, contentment, Id_order, Id_user, commentTime, grade, Id_DR "
        "FROM comment WHERE Id_DR = ? ORDER BY Id_comment",
        (restaurant_id,),
    ).fetchall()
    return [Comment(*tuple(row)) for row in rows]