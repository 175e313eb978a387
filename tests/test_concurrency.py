"""Concurrent stock changes against a single sweet."""

import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from sweetshop.exceptions import OutOfStock
from sweetshop.models.sweet import Sweet
from sweetshop.schemas.sweet import SweetCreate
from sweetshop.services.inventory import InventoryService


def make_sweet(db, quantity: int) -> int:
    sweet = InventoryService(db).create(
        SweetCreate(name="Ladoo", category="Milk", price=10, quantity=quantity)
    )
    sweet_id = sweet.id
    # End the read transaction so the worker sessions can take the write lock
    db.commit()
    return sweet_id


def run_concurrently(session_factory, workers: int, action):
    barrier = threading.Barrier(workers)

    def worker(_):
        session = session_factory()
        try:
            barrier.wait()
            return action(InventoryService(session))
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(worker, range(workers)))


def current_quantity(session_factory, sweet_id: int) -> int:
    session = session_factory()
    try:
        return session.get(Sweet, sweet_id).quantity
    finally:
        session.close()


def test_concurrent_purchases_never_oversell(db, session_factory):
    """N buyers racing for Q < N units: exactly Q succeed and stock ends at zero."""
    stock, buyers = 3, 10
    sweet_id = make_sweet(db, stock)

    def buy(inventory):
        try:
            return inventory.purchase(sweet_id)
        except OutOfStock:
            return "out"

    results = run_concurrently(session_factory, buyers, buy)

    successes = [r for r in results if r != "out"]
    assert len(successes) == stock
    assert results.count("out") == buyers - stock
    assert sorted(successes) == [0, 1, 2]
    assert current_quantity(session_factory, sweet_id) == 0


def test_concurrent_restocks_are_not_lost(db, session_factory):
    sweet_id = make_sweet(db, 1)

    results = run_concurrently(session_factory, 8, lambda inventory: inventory.restock(sweet_id, 2))

    assert sorted(results) == [3, 5, 7, 9, 11, 13, 15, 17]
    assert current_quantity(session_factory, sweet_id) == 17


def test_sqlite_read_transaction_holds_write_lock(session_factory):
    reader = session_factory()
    bind = reader.get_bind()
    if bind.dialect.name != "sqlite":
        reader.close()
        pytest.skip("SQLite locking only")

    other = sqlite3.connect(bind.url.database, timeout=0, isolation_level=None)
    try:
        reader.query(Sweet).all()
        with pytest.raises(sqlite3.OperationalError, match="locked"):
            other.execute("BEGIN IMMEDIATE")
    finally:
        reader.close()
        other.close()
