"""A customer's shopping cart: quantities, selection and turning selections into orders."""

from dataclasses import dataclass
from datetime import datetime

from weican.database import TIMESTAMP_FORMAT

_ITEM_QUERY = (
    "SELECT c.id_cart, c.id_DR, c.id_food, c.number, c.selectMode, "
    "COALESCE(f.price, 0), COALESCE(f.foodname, ''), COALESCE(f.imagepath, '') "
    "FROM cart c LEFT JOIN food f ON f.id_food = c.id_food AND f.id_DR = c.id_DR "
)


@dataclass(frozen=True)
class CartItem:
    """One food line in the cart, with the menu details it refers to."""

    cart_id: int
    restaurant_id: str
    food_id: str
    quantity: int
    selected: bool
    price: float
    food_name: str
    image_path: str

    @property
    def total(self):
        return self.price * self.quantity


def _item(row):
    return CartItem(
        cart_id=row[0],
        restaurant_id=row[1],
        food_id=row[2],
        quantity=int(row[3]),
        selected=bool(row[4]),
        price=float(row[5]),
        food_name=row[6],
        image_path=row[7],
    )


class Cart:
    """The cart of one user, kept in the database."""

    def __init__(self, conn, user_id):
        self.conn = conn
        self.user_id = user_id

    def restaurants(self):
        """Ids of the restaurants the cart holds food from."""
        rows = self.conn.execute(
            "SELECT id_DR FROM cart WHERE id_user = ? GROUP BY id_DR ORDER BY id_DR",
            (self.user_id,),
        ).fetchall()
        return [row[0] for row in rows]

    def items(self, restaurant_id):
        """The cart lines for one restaurant, in the order they were added."""
        rows = self.conn.execute(
            _ITEM_QUERY + "WHERE c.id_user = ? AND c.id_DR = ? ORDER BY c.id_cart",
            (self.user_id, restaurant_id),
        ).fetchall()
        return [_item(row) for row in rows]

    def set_quantity(self, restaurant_id, food_id, quantity):
        """Change how many of a food are in the cart; zero removes the line."""
        if quantity < 0:
            raise ValueError("quantity must not be negative")
        with self.conn:
            if quantity == 0:
                cursor = self.conn.execute(
                    "DELETE FROM cart WHERE id_user = ? AND id_food = ? AND id_DR = ?",
                    (self.user_id, food_id, restaurant_id),
                )
            else:
                cursor = self.conn.execute(
                    "UPDATE cart SET number = ? WHERE id_user = ? AND id_food = ? AND id_DR = ?",
                    (quantity, self.user_id, food_id, restaurant_id),
                )
        if cursor.rowcount == 0:
            raise KeyError(f"food {food_id} of {restaurant_id} is not in the cart")

    def select(self, cart_id, selected):
        """Mark one cart line as chosen for checkout, or not."""
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE cart SET selectMode = ? WHERE id_cart = ? AND id_user = ?",
                (int(bool(selected)), cart_id, self.user_id),
            )
        if cursor.rowcount == 0:
            raise KeyError(f"cart line {cart_id} does not exist")

    def select_restaurant(self, restaurant_id, selected):
        """Mark every line of one restaurant as chosen, or not."""
        with self.conn:
            self.conn.execute(
                "UPDATE cart SET selectMode = ? WHERE id_user = ? AND id_DR = ?",
                (int(bool(selected)), self.user_id, restaurant_id),
            )

    def selected_total(self):
        """Price of everything currently chosen for checkout."""
        rows = self.conn.execute(
            _ITEM_QUERY + "WHERE c.id_user = ? AND c.selectMode = 1",
            (self.user_id,),
        ).fetchall()
        return sum(_item(row).total for row in rows)

    def checkout(self, now=None):
        """Create one order per restaurant from the chosen lines and drop them from the cart."""
        moment = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        order_ids = []
        with self.conn:
            restaurant_ids = [
                row[0]
                for row in self.conn.execute(
                    "SELECT id_DR FROM cart WHERE id_user = ? AND selectMode = 1 "
                    "GROUP BY id_DR ORDER BY id_DR",
                    (self.user_id,),
                ).fetchall()
            ]
            for restaurant_id in restaurant_ids:
                cursor = self.conn.execute(
                    "INSERT INTO orders (Id_DR, Id_user, OrderCreateTime) VALUES (?, ?, ?)",
                    (restaurant_id, self.user_id, moment),
                )
                order_id = cursor.lastrowid
                lines = self.conn.execute(
                    "SELECT id_food, number FROM cart "
                    "WHERE id_user = ? AND selectMode = 1 AND id_DR = ? ORDER BY id_cart",
                    (self.user_id, restaurant_id),
                ).fetchall()
                self.conn.executemany(
                    "INSERT INTO ordertofood (Id_order, Id_DR, Id_food, number) VALUES (?, ?, ?, ?)",
                    [(order_id, restaurant_id, food_id, number) for food_id, number in lines],
                )
                order_ids.append(order_id)
            self.conn.execute(
                "DELETE FROM cart WHERE id_user = ? AND selectMode = 1", (self.user_id,)
            )
        return order_ids