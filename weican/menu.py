"""A restaurant's menu: food details, editing, recommendations and cart quantities."""

import sqlite3
from dataclasses import dataclass

from weican.shop import restaurant_food_ids

_FOOD_COLUMNS = (
    "id_food, foodname, price, foodDescription, foodIngredient, "
    "foodTaste, foodVolume, imagepath, sales, recommend"
)


@dataclass(frozen=True)
class Food:
    """One dish on a restaurant's menu."""

    food_id: str
    name: str
    price: float
    description: str = ""
    ingredient: str = ""
    taste: str = ""
    volume: str = ""
    image_path: str = ""
    sales: int = 0
    recommendations: int = 0


def _food(row):
    return Food(
        food_id=row[0],
        name=row[1] or "",
        price=float(row[2] or 0.0),
        description=row[3] or "",
        ingredient=row[4] or "",
        taste=row[5] or "",
        volume=row[6] or "",
        image_path=row[7] or "",
        sales=int(row[8] or 0),
        recommendations=int(row[9] or 0),
    )


class Menu:
    """The foods of one restaurant, kept in the database."""

    def __init__(self, conn, restaurant_id):
        self.conn = conn
        self.restaurant_id = restaurant_id

    def food_ids(self):
        """Ids of the foods on the menu, in storage order."""
        return restaurant_food_ids(self.conn, self.restaurant_id)

    def get(self, food_id):
        """The details of one food."""
        row = self.conn.execute(
            f"SELECT {_FOOD_COLUMNS} FROM food WHERE id_food = ? AND id_DR = ?",
            (food_id, self.restaurant_id),
        ).fetchone()
        if row is None:
            raise KeyError(f"food {food_id} is not on the menu of {self.restaurant_id}")
        return _food(row)

    def add(self, food):
        """Put a new food on the menu."""
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT INTO food (id_food, foodname, price, id_DR, foodDescription, "
                    "foodIngredient, foodTaste, foodVolume) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        food.food_id,
                        food.name,
                        food.price,
                        self.restaurant_id,
                        food.description,
                        food.ingredient,
                        food.taste,
                        food.volume,
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise ValueError(
                f"food {food.food_id} is already on the menu of {self.restaurant_id}"
            ) from exc

    def update(self, food):
        """Store edited name, price, description, ingredients, taste and portion of a food."""
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE food SET foodname = ?, price = ?, foodDescription = ?, "
                "foodIngredient = ?, foodTaste = ?, foodVolume = ? "
                "WHERE id_food = ? AND id_DR = ?",
                (
                    food.name,
                    food.price,
                    food.description,
                    food.ingredient,
                    food.taste,
                    food.volume,
                    food.food_id,
                    self.restaurant_id,
                ),
            )
        if cursor.rowcount == 0:
            raise KeyError(f"food {food.food_id} is not on the menu of {self.restaurant_id}")

    def recommend(self, food_id):
        """Count one more recommendation for a food and return the new count."""
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE food SET recommend = recommend + 1 WHERE id_food = ? AND id_DR = ?",
                (food_id, self.restaurant_id),
            )
        if cursor.rowcount == 0:
            raise KeyError(f"food {food_id} is not on the menu of {self.restaurant_id}")
        return self.get(food_id).recommendations

    def cart_quantity(self, food_id, user_id):
        """How many of a food the user has in the cart; zero when none."""
        row = self.conn.execute(
            "SELECT number FROM cart WHERE id_food = ? AND id_user = ? AND id_DR = ? "
            "ORDER BY id_cart",
            (food_id, user_id, self.restaurant_id),
        ).fetchone()
        return int(row[0]) if row is not None else 0

    def set_cart_quantity(self, food_id, user_id, quantity):
        """Set how many of a food the user has in the cart; zero removes it."""
        if quantity < 0:
            raise ValueError("quantity must not be negative")
        key = (user_id, food_id, self.restaurant_id)
        with self.conn:
            if quantity == 0:
                self.conn.execute(
                    "DELETE FROM cart WHERE id_user = ? AND id_food = ? AND id_DR = ?", key
                )
                return
            cursor = self.conn.execute(
                "UPDATE cart SET number = ? WHERE id_user = ? AND id_food = ? AND id_DR = ?",
                (quantity, *key),
            )
            if cursor.rowcount == 0:
                self.conn.execute(
                    "INSERT INTO cart (id_food, id_DR, id_user, number) VALUES (?, ?, ?, ?)",
                    (food_id, self.restaurant_id, user_id, quantity),
                )