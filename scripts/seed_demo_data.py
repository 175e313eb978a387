#!/usr/bin/env python3
"""Seed demo sweets.

Creates a handful of sweets through the inventory service. Sweets that
already exist (same name and category) are left alone, so the script can be
run repeatedly.

Usage:
    DATABASE_URL=sqlite:///./sweetshop.db python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sweetshop.database import SessionLocal, init_db
from sweetshop.exceptions import DuplicateItem
from sweetshop.schemas.sweet import SweetCreate
from sweetshop.services.inventory import InventoryService

DEMO_SWEETS = [
    {"name": "Ladoo", "category": "Milk", "price": 10, "quantity": 25},
    {"name": "Rasgulla", "category": "Milk", "price": 12, "quantity": 30},
    {"name": "Kaju Katli", "category": "Dry Fruit", "price": 40, "quantity": 15},
    {"name": "Mysore Pak", "category": "Ghee", "price": 18, "quantity": 20},
    {"name": "Jalebi", "category": "Fried", "price": 8, "quantity": 50},
    {"name": "Gulab Jamun", "category": "Fried", "price": 15, "quantity": 0},
]


def seed_demo_data():
    """Seed the database with demo sweets."""
    init_db()
    session = SessionLocal()
    inventory = InventoryService(session)

    try:
        created = 0
        for data in DEMO_SWEETS:
            try:
                inventory.create(SweetCreate(**data))
                created += 1
            except DuplicateItem:
                print(f"Skipping existing sweet: {data['name']} ({data['category']})")
        print(f"Demo data seeded successfully! Created {created} sweet(s).")
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
