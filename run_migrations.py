#!/usr/bin/env python3
"""
Manual Database Migration Script
==================================
Run this script once to create the users, items, orders and
addresses tables. Safe to re-run: every statement is IF NOT EXISTS.

Usage:
    python run_migrations.py
"""

import logging

from src.database import close_connection_pool, get_db

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print("=" * 60)
    print("Furima Market - Database Migration")
    print("=" * 60)

    try:
        db = get_db()
        db.run_migrations()
    finally:
        close_connection_pool()

    print("\nAll done! Database is ready to use.")
    print("=" * 60)
