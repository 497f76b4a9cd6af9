"""SQLite storage for users, restaurants, menus, carts, orders and comments."""

import os
import sqlite3

DEFAULT_DATABASE = "ofms.db"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS user (
    id_user TEXT PRIMARY KEY,
    userType INTEGER NOT NULL DEFAULT 2,
    username TEXT NOT NULL DEFAULT '',
    realname TEXT NOT NULL DEFAULT '',
    password TEXT NOT NULL DEFAULT '',
    teleNum TEXT NOT NULL DEFAULT '',
    mailbox TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    user_longitude TEXT NOT NULL DEFAULT '',
    user_latitude TEXT NOT NULL DEFAULT '',
    imagepath TEXT NOT NULL DEFAULT '',
    money REAL NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS DRinfo (
    DRID TEXT PRIMARY KEY,
    DRName TEXT NOT NULL DEFAULT '',
    DRType INTEGER NOT NULL DEFAULT 0,
    city TEXT NOT NULL DEFAULT '',
    createTime TEXT,
    longitude TEXT NOT NULL DEFAULT '',
    latitude TEXT NOT NULL DEFAULT '',
    openTime TEXT NOT NULL DEFAULT '00:00:00',
    closeTime TEXT NOT NULL DEFAULT '23:59:59',
    capacity INTEGER NOT NULL DEFAULT 0,
    introduction TEXT NOT NULL DEFAULT '',
    ImagePath TEXT NOT NULL DEFAULT '',
    BaseFare REAL NOT NULL DEFAULT 0,
    Fare REAL NOT NULL DEFAULT 0,
    salesVolume INTEGER NOT NULL DEFAULT 0,
    rating REAL NOT NULL DEFAULT 0,
    salesNum INTEGER NOT NULL DEFAULT 0,
    consumingTime REAL NOT NULL DEFAULT 0,
    speed TEXT NOT NULL DEFAULT '00:00:00',
    compensate INTEGER NOT NULL DEFAULT 0,
    redPacket INTEGER NOT NULL DEFAULT 0,
    rebate INTEGER NOT NULL DEFAULT 0,
    freeShipping INTEGER NOT NULL DEFAULT 0,
    Id_user TEXT
);

CREATE TABLE IF NOT EXISTS food (
    id_food TEXT NOT NULL,
    id_DR TEXT NOT NULL,
    foodname TEXT NOT NULL DEFAULT '',
    price REAL NOT NULL DEFAULT 0,
    foodDescription TEXT NOT NULL DEFAULT '',
    foodIngredient TEXT NOT NULL DEFAULT '',
    foodTaste TEXT NOT NULL DEFAULT '',
    foodVolume TEXT NOT NULL DEFAULT '',
    imagepath TEXT NOT NULL DEFAULT '',
    sales INTEGER NOT NULL DEFAULT 0,
    recommend INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (id_food, id_DR)
);

CREATE TABLE IF NOT EXISTS cart (
    id_cart INTEGER PRIMARY KEY AUTOINCREMENT,
    id_user TEXT NOT NULL,
    id_DR TEXT NOT NULL,
    id_food TEXT NOT NULL,
    number INTEGER NOT NULL DEFAULT 1,
    selectMode INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS orders (
    orderid INTEGER PRIMARY KEY AUTOINCREMENT,
    Id_DR TEXT NOT NULL,
    Id_user TEXT NOT NULL,
    price REAL NOT NULL DEFAULT 0,
    pay REAL,
    rating INTEGER,
    OrderCreateTime TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    OrderPayTime TEXT,
    OrderReceiveTime TEXT,
    OrderFinishTime TEXT,
    OrderPayCondition INTEGER NOT NULL DEFAULT 0,
    OrderReceiveCondition INTEGER NOT NULL DEFAULT 0,
    OrderFinishCondition INTEGER NOT NULL DEFAULT 0,
    OrderCancelCondition INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS ordertofood (
    Id_order INTEGER NOT NULL,
    Id_DR TEXT NOT NULL,
    Id_food TEXT NOT NULL,
    number INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS comment (
    Id_comment INTEGER PRIMARY KEY AUTOINCREMENT,
    contentment TEXT NOT NULL DEFAULT '',
    Id_order INTEGER,
    Id_user TEXT,
    commentTime TEXT,
    grade INTEGER NOT NULL DEFAULT 0,
    Id_DR TEXT
);
"""


def create_schema(conn):
    """Create every table the system uses; existing tables are left alone."""
    conn.executescript(_SCHEMA)


def connect(path=DEFAULT_DATABASE):
    """Open the database at *path*, make sure the schema exists and return the connection."""
    conn = sqlite3.connect(os.fspath(path))
    conn.row_factory = sqlite3.Row
    try:
        create_schema(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn