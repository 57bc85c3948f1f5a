"""
Furima Market
=============
Flea-market web application: members put items up for sale and edit
their own listings.

Main components:
- schema: form validation and fixed lookup tables
- database: PostgreSQL persistence for users, items and orders
- storage: item image uploads
"""

from .database import (
    Database,
    get_db,
)

__version__ = "1.0.0"

__all__ = [
    "Database",
    "get_db",
]
