"""Food-ordering logic on SQLite: sign-up checks, restaurants, menus, carts, order search and comments."""

__version__ = "0.1.0"