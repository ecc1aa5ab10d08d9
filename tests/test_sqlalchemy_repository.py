"""Tests for the SQLAlchemy sneaker repository."""

from pathlib import Path
from uuid import uuid4

import pytest

from sneaker_inventory.adapters.sqlalchemy_sneaker_repository import (
    SqlAlchemySneakerRepository,
    create_database_engine,
)
from sneaker_inventory.domain.errors import NotFoundError, PersistenceError
from sneaker_inventory.domain.models import (
    Currency,
    Partition,
    PhotoRole,
    SizeUnit,
    SneakerRecord,
)
from sneaker_inventory.services.records import RecordStore
from sneaker_inventory.services.transfer import TransferService
from sneaker_inventory.services.views import ViewService


@pytest.fixture
def sql_repository() -> SqlAlchemySneakerRepository:
    return SqlAlchemySneakerRepository.create(create_database_engine("sqlite://"))


def _record(**overrides: object) -> SneakerRecord:
    values: dict[str, object] = {
        "id": uuid4(),
        "name": "Air Max 90",
        "brand": "Nike",
        "size": 9.5,
        "size_unit": SizeUnit.US,
        "price": 140.0,
        "currency": Currency.USD,
        "condition": 9,
        "is_wishlist": False,
        "photos": {PhotoRole.FRONT: b"\xff\xd8front", PhotoRole.SOLE: b"\xff\xd8sole"},
    }
    values.update(overrides)
    return SneakerRecord(**values)  # type: ignore[arg-type]


def test_insert_and_get(sql_repository: SqlAlchemySneakerRepository) -> None:
    record = _record()

    sql_repository.insert(record)

    assert sql_repository.get(record.id) == record
    assert sql_repository.get(uuid4()) is None


def test_list_records_filters_partition(
    sql_repository: SqlAlchemySneakerRepository,
) -> None:
    owned = _record(name="Owned")
    wanted = _record(name="Wanted", is_wishlist=True)
    sql_repository.insert(owned)
    sql_repository.insert(wanted)

    assert sql_repository.list_records(False) == [owned]
    assert sql_repository.list_records(True) == [wanted]
    assert sql_repository.list_records() == [owned, wanted]


def test_replace_overwrites_row(sql_repository: SqlAlchemySneakerRepository) -> None:
    record = _record()
    sql_repository.insert(record)
    updated = _record(id=record.id, name="Air Max 95", photos={PhotoRole.BOX: b"box"})

    sql_repository.replace(updated)

    assert sql_repository.get(record.id) == updated


def test_replace_missing_row_raises(sql_repository: SqlAlchemySneakerRepository) -> None:
    with pytest.raises(NotFoundError):
        sql_repository.replace(_record())


def test_delete_reports_existence(sql_repository: SqlAlchemySneakerRepository) -> None:
    record = _record()
    sql_repository.insert(record)

    assert sql_repository.delete(record.id) is True
    assert sql_repository.delete(record.id) is False
    assert sql_repository.get(record.id) is None


def test_transaction_rolls_back_on_error(
    sql_repository: SqlAlchemySneakerRepository,
) -> None:
    record = _record()

    with pytest.raises(RuntimeError), sql_repository.transaction():
        sql_repository.insert(record)
        raise RuntimeError("abort")

    assert sql_repository.list_records() == []


def test_duplicate_id_surfaces_persistence_error(
    sql_repository: SqlAlchemySneakerRepository,
) -> None:
    record = _record()
    sql_repository.insert(record)

    with pytest.raises(PersistenceError):
        sql_repository.insert(_record(id=record.id, name="Clone"))

    assert sql_repository.list_records() == [record]


def test_store_round_trip_through_database(
    sql_repository: SqlAlchemySneakerRepository,
) -> None:
    store = RecordStore(sql_repository)
    views = ViewService(store)
    wanted = store.create(
        {"name": "Jordan 4", "price": 210, "photos": {"back": b"back"}},
        Partition.WISHLIST,
    )
    store.create({"name": "Samba", "price": 100}, Partition.COLLECTION)

    new_id = TransferService(store).move_to_collection(wanted)

    assert [record.name for record in views.sorted(Partition.COLLECTION)] == [
        "Jordan 4",
        "Samba",
    ]
    assert store.get(new_id).photos == {PhotoRole.BACK: b"back"}
    assert views.sorted(Partition.WISHLIST) == []
    assert views.total_value(Partition.COLLECTION) == pytest.approx(310)


def test_file_database_persists_between_engines(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'sneakers.db'}"
    first = SqlAlchemySneakerRepository.create(create_database_engine(url))
    record = _record()
    first.insert(record)

    second = SqlAlchemySneakerRepository.create(create_database_engine(url))

    assert second.get(record.id) == record
