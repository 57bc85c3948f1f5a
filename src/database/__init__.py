"""PostgreSQL persistence for users, items and orders"""

from .db import Database, get_db, close_connection_pool

__all__ = ['Database', 'get_db', 'close_connection_pool']
