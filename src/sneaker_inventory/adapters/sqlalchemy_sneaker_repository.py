"""SQLAlchemy-backed durable store for sneaker records."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import Engine, LargeBinary, String, create_engine, make_url, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    sessionmaker,
)
from sqlalchemy.pool import StaticPool

from sneaker_inventory.domain.errors import NotFoundError, PersistenceError
from sneaker_inventory.domain.models import (
    Currency,
    PhotoRole,
    SizeUnit,
    SneakerRecord,
)
from sneaker_inventory.services.records import SneakerRepository


class Base(DeclarativeBase):
    pass


class SneakerRow(Base):
    """One row per sneaker, photos stored inline as binary columns."""

    __tablename__ = "sneakers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    brand: Mapped[str | None] = mapped_column(String(200))
    size: Mapped[float]
    size_unit: Mapped[str] = mapped_column(String(2))
    price: Mapped[float]
    currency: Mapped[str] = mapped_column(String(3))
    condition: Mapped[int]
    is_wishlist: Mapped[bool] = mapped_column(index=True)
    photo_front: Mapped[bytes | None] = mapped_column(LargeBinary)
    photo_box: Mapped[bytes | None] = mapped_column(LargeBinary)
    photo_insole: Mapped[bytes | None] = mapped_column(LargeBinary)
    photo_side: Mapped[bytes | None] = mapped_column(LargeBinary)
    photo_sole: Mapped[bytes | None] = mapped_column(LargeBinary)
    photo_back: Mapped[bytes | None] = mapped_column(LargeBinary)

    def __repr__(self) -> str:
        return f"<SneakerRow {self.id}: {self.name}>"


def create_database_engine(database_url: str) -> Engine:
    """Create an engine, sharing one connection for in-memory SQLite."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url)
    if url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


@dataclass
class SqlAlchemySneakerRepository(SneakerRepository):
    """SQLAlchemy implementation for sneaker persistence."""

    session_factory: sessionmaker[Session]
    _session: Session | None = field(default=None, init=False, repr=False)
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    @classmethod
    def create(cls, engine: Engine) -> "SqlAlchemySneakerRepository":
        """Create the schema if needed and return a repository bound to it."""
        try:
            Base.metadata.create_all(engine)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to initialize sneaker storage") from exc
        return cls(session_factory=sessionmaker(engine, expire_on_commit=False))

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed calls in one session and commit them together."""
        with self._session_scope():
            yield

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        with self._lock:
            if self._session is not None:
                yield self._session
                return
            session = self.session_factory()
            self._session = session
            try:
                yield session
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise PersistenceError("Failed to commit sneaker changes") from exc
            except BaseException:
                session.rollback()
                raise
            finally:
                self._session = None
                session.close()

    def insert(self, record: SneakerRecord) -> None:
        """Insert a new sneaker row."""
        with self._session_scope() as session:
            row = SneakerRow(id=str(record.id))
            _apply(row, record)
            session.add(row)

    def replace(self, record: SneakerRecord) -> None:
        """Overwrite the row of an existing sneaker."""
        with self._session_scope() as session:
            row = session.get(SneakerRow, str(record.id))
            if row is None:
                raise NotFoundError(record.id)
            _apply(row, record)

    def delete(self, record_id: UUID) -> bool:
        """Delete a sneaker row, returning whether it existed."""
        with self._session_scope() as session:
            row = session.get(SneakerRow, str(record_id))
            if row is None:
                return False
            session.delete(row)
            return True

    def get(self, record_id: UUID) -> SneakerRecord | None:
        """Return a sneaker by id, if present."""
        with self._session_scope() as session:
            row = session.get(SneakerRow, str(record_id))
            if row is None:
                return None
            return _parse_row(row)

    def list_records(self, is_wishlist: bool | None = None) -> list[SneakerRecord]:
        """Return sneakers of one partition, or all of them."""
        statement = select(SneakerRow).order_by(SneakerRow.name, SneakerRow.id)
        if is_wishlist is not None:
            statement = statement.where(SneakerRow.is_wishlist == is_wishlist)
        with self._session_scope() as session:
            return [_parse_row(row) for row in session.scalars(statement)]


def _photo_column(role: PhotoRole) -> str:
    return f"photo_{role.value}"


def _apply(row: SneakerRow, record: SneakerRecord) -> None:
    row.name = record.name
    row.brand = record.brand
    row.size = record.size
    row.size_unit = record.size_unit.value
    row.price = record.price
    row.currency = record.currency.value
    row.condition = record.condition
    row.is_wishlist = record.is_wishlist
    for role in PhotoRole:
        setattr(row, _photo_column(role), record.photos.get(role))


def _parse_row(row: SneakerRow) -> SneakerRecord:
    """Parse a sneaker row into a domain model."""
    photos = {}
    for role in PhotoRole:
        blob = getattr(row, _photo_column(role))
        if blob is not None:
            photos[role] = bytes(blob)
    return SneakerRecord(
        id=UUID(row.id),
        name=row.name,
        brand=row.brand,
        size=float(row.size),
        size_unit=SizeUnit(row.size_unit),
        price=float(row.price),
        currency=Currency(row.currency),
        condition=int(row.condition),
        is_wishlist=bool(row.is_wishlist),
        photos=photos,
    )
