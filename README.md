# weican

`weican` holds the business logic of a small food-ordering service, with all
data kept in a SQLite database. It is a library: it has no command line and no
user interface.

Account ids decide who is who: an id containing `user` belongs to a customer,
one containing `DR` to a restaurant owner (`weican.shop.role_for`).

## Modules

| Module | What it does |
| --- | --- |
| `weican.database` | `connect(path)` opens a database (default `ofms.db`) and creates the tables; `create_schema(conn)` does the latter on your own connection. |
| `weican.validation` | Sign-up checks (`check_password`, `check_phone`, `check_name`, `check_real_name`, `check_email`), `make_user_id`, the `SignUpForm` dataclass and `register`. |
| `weican.restaurants` | The `Restaurant` record, `RestaurantList` with its averages, `load_restaurants`, `distance` and `delivery_seconds`. |
| `weican.ranking` | Sorting (`order_by_score`, `order_by_sales`, `order_by_speed`, `order_by_distance`, `smart_order`) and filtering (`search_by_name`, `select_cuisine`, `within_distance`, `compensate_only`, `rebate_only`, `red_packet_only`, `free_shipping_only`). |
| `weican.shop` | The shop page: `Role`, `SortMode`, `FeatureFilter`, `search_restaurants`, `distance_limit`, `format_card`, `restaurant_for_owner`, `restaurant_food_ids`. |
| `weican.menu` | `Food` and `Menu`: reading, adding and editing dishes, recommendations and cart quantities per dish. |
| `weican.cart` | `CartItem` and `Cart`: cart lines per restaurant, selection, totals and checkout into orders. |
| `weican.order_search` | `OrderFilter`, `MerchantSort`, `time_range`, `build_search_query`, `list_order_ids`, `search_order_ids`. |
| `weican.comments` | `Comment`, `add_comment` (rates and finishes an order, updates sales and ratings) and `list_comments`. |

## Getting started

```python
from weican.database import connect

conn = connect("weican.db")
```

### Sign-up checks

```python
from weican.validation import check_email, check_name, check_password

check_email("someone@example.com")   # True
check_password("abc12")              # True: 5 to 16 bytes, a letter and a digit
check_name("a" * 21)                 # False: user names fit in 20 bytes
```

`SignUpForm.errors()` lists the fields that fail their check, in form order.
`register(conn, form, merchant)` stores the account and returns its id
(`"user"` or `"DR"` followed by the phone number); it raises `ValueError` for
an invalid form or an id that already exists.

### Finding restaurants

```python
from weican.restaurants import load_restaurants
from weican.shop import FeatureFilter, SortMode, format_card, search_restaurants

restaurants = load_restaurants(conn, "N39.794502", "E116.35023")
shown = search_restaurants(
    restaurants,
    text="noodle",
    cuisine=0,            # 0 keeps every cuisine
    distance_index=2,     # 0 none, then 500, 1000, 3000, 5000, 10000 metres
    sort_mode=SortMode.SCORE,
    feature=FeatureFilter.FREE_SHIPPING,
)
cards = [format_card(r) for r in shown]
```

Positions are written with a hemisphere letter, such as `"N39.79"` and
`"E116.35"`; `distance` returns metres. `SortMode.SMART` weighs each restaurant
against the average sales, rating and delivery time of the whole input list.

### Menu and cart

```python
from weican.cart import Cart
from weican.menu import Food, Menu

menu = Menu(conn, "DR-demo")
menu.add(Food("F1", "Dumplings", 12.5))
menu.set_cart_quantity("F1", "user-demo", 2)   # adds or updates the cart line

cart = Cart(conn, "user-demo")
cart.select_restaurant("DR-demo", True)
print(cart.selected_total())                  # 25.0
order_ids = cart.checkout()                   # one order per restaurant
```

`Cart.set_quantity` changes an existing line (zero removes it) and raises
`KeyError` when the food is not in the cart.

### Searching orders and commenting

```python
from datetime import datetime
from weican.comments import add_comment
from weican.order_search import OrderFilter, search_order_ids, time_range
from weican.shop import Role

start, end = time_range(1, datetime.now())    # the last 7 days
ids = search_order_ids(conn, "user-demo", Role.CUSTOMER, OrderFilter.ALL, start, end)

add_comment(conn, ids[0], "user-demo", "DR-demo", "Tasty", 5)
```

## What the package does not do

There is no log-in: accounts can be created with `register`, but passwords are
not checked against stored accounts and there is no captcha. There is no
payment: nothing charges a customer's balance or marks an order as paid,
received or cancelled, and orders have no per-order detail view. There is no
command to run and no screen; callers build these on top of the modules above.