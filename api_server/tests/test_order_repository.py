"""SQLAlchemy 주문 저장소 테스트"""

from datetime import datetime

import pytest
from sqlalchemy import text

from incoming_goods.core.exceptions import Conflict, InvalidTransition, NotFound, StorageError
from incoming_goods.db.database import seed_sample_orders
from incoming_goods.domain import Order, OrderStatus, Photo


def make_order(barcode="123456789"):
    return Order(barcode=barcode, description="Box of Pens", order_date=datetime(2024, 5, 1, 9, 0))


def test_insert_assigns_id_and_version(repository):
    order = repository.insert(make_order())
    assert order.id is not None
    assert order.version == 0
    assert repository.get_by_id(order.id) == order


def test_missing_rows_return_none(repository):
    assert repository.get_by_id(1) is None
    assert repository.get_by_barcode("nope") is None
    assert repository.get_photo(1, 1) is None


def test_duplicate_barcode_is_conflict(repository):
    repository.insert(make_order())
    with pytest.raises(Conflict):
        repository.insert(make_order())
    assert len(repository.list_all()) == 1


def test_update_bumps_version(repository):
    order = repository.insert(make_order())
    updated = repository.update(order.evolve(arrival_date=datetime(2024, 5, 2)))
    assert updated.version == 1
    stored = repository.get_by_id(order.id)
    assert stored.version == 1
    assert stored.status is OrderStatus.ARRIVED


def test_stale_update_is_conflict(repository):
    order = repository.insert(make_order())
    repository.update(order.evolve(arrival_date=datetime(2024, 5, 2)))
    with pytest.raises(Conflict):
        repository.update(order.evolve(is_closed=True))
    assert repository.get_by_id(order.id).is_closed is False


def test_update_unknown_order(repository):
    with pytest.raises(NotFound):
        repository.update(make_order().evolve(id=77))


def test_closed_row_rejects_update(repository):
    order = repository.insert(make_order())
    closed = repository.update(order.evolve(is_closed=True))
    with pytest.raises(InvalidTransition):
        repository.update(closed.evolve(arrival_date=datetime(2024, 5, 3)))


def test_add_photo_keeps_insertion_order(repository):
    order = repository.insert(make_order())
    first = repository.add_photo(order, Photo(order.id, "a.jpg", f"{order.id}/a.jpg", datetime(2024, 5, 2)))
    order = repository.get_by_id(order.id)
    second = repository.add_photo(order, Photo(order.id, "b.jpg", f"{order.id}/b.jpg", datetime(2024, 5, 2)))

    stored = repository.get_by_id(order.id)
    assert [p.id for p in stored.photos] == [first.id, second.id]
    assert repository.get_photo(order.id, second.id).storage_key == f"{order.id}/b.jpg"
    assert repository.get_photo(order.id + 1, second.id) is None


def test_add_photo_to_closed_order(repository):
    order = repository.insert(make_order())
    closed = repository.update(order.evolve(is_closed=True))
    with pytest.raises(InvalidTransition):
        repository.add_photo(closed, Photo(order.id, "a.jpg", f"{order.id}/a.jpg", datetime(2024, 5, 2)))
    assert repository.get_by_id(order.id).photos == []


def test_add_photo_with_stale_version(repository):
    order = repository.insert(make_order())
    repository.update(order.evolve(arrival_date=datetime(2024, 5, 2)))
    with pytest.raises(Conflict):
        repository.add_photo(order, Photo(order.id, "a.jpg", f"{order.id}/a.jpg", datetime(2024, 5, 2)))


def test_database_errors_become_storage_error(repository, session_factory):
    with session_factory() as session:
        session.execute(text("DROP TABLE order_photos"))
        session.execute(text("DROP TABLE orders"))
        session.commit()
    with pytest.raises(StorageError):
        repository.list_all()


def test_seed_sample_orders_once(session_factory, repository):
    assert seed_sample_orders(session_factory) == 3
    assert seed_sample_orders(session_factory) == 0
    orders = repository.list_all()
    assert [o.barcode for o in orders] == ["123456789", "987654321", "555666777"]
    assert [o.status for o in orders] == [OrderStatus.PENDING, OrderStatus.PENDING, OrderStatus.ARRIVED]
