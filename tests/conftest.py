"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from io import BytesIO
from uuid import UUID

import pytest
from PIL import Image

from sneaker_inventory.config import Settings
from sneaker_inventory.containers import AppContainer
from sneaker_inventory.domain.capture import BarcodeFormat, PickerSource
from sneaker_inventory.domain.errors import PersistenceError
from sneaker_inventory.domain.models import SneakerRecord
from sneaker_inventory.services.photos import (
    ImagePickerProvider,
    PhotoCodec,
    PhotoService,
)
from sneaker_inventory.services.records import RecordStore, SneakerRepository
from sneaker_inventory.services.scanner import ImageCaptureProvider
from sneaker_inventory.services.transfer import TransferService
from sneaker_inventory.services.views import ViewService


@dataclass
class InMemorySneakerRepository(SneakerRepository):
    """In-memory sneaker repository with snapshot rollback."""

    records: dict[UUID, SneakerRecord] = field(default_factory=dict)
    fail_commits: bool = False
    fail_deletes: bool = False
    commits: int = 0
    _in_transaction: bool = False

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._in_transaction:
            yield
            return
        snapshot = dict(self.records)
        self._in_transaction = True
        try:
            yield
            if self.fail_commits:
                raise PersistenceError("disk full")
        except BaseException:
            self.records = snapshot
            raise
        finally:
            self._in_transaction = False
        self.commits += 1

    def insert(self, record: SneakerRecord) -> None:
        with self.transaction():
            self.records[record.id] = record

    def replace(self, record: SneakerRecord) -> None:
        with self.transaction():
            self.records[record.id] = record

    def delete(self, record_id: UUID) -> bool:
        with self.transaction():
            if self.fail_deletes:
                raise PersistenceError("delete failed")
            return self.records.pop(record_id, None) is not None

    def get(self, record_id: UUID) -> SneakerRecord | None:
        return self.records.get(record_id)

    def list_records(self, is_wishlist: bool | None = None) -> list[SneakerRecord]:
        return [
            record
            for record in self.records.values()
            if is_wishlist is None or record.is_wishlist == is_wishlist
        ]


@dataclass
class FakePhotoCodec(PhotoCodec):
    """Codec that tags blobs instead of re-encoding them."""

    def encode(self, raw: bytes) -> bytes:
        return b"jpeg:" + raw

    def decode(self, blob: bytes) -> Image.Image:
        return Image.new("RGB", (1, 1))


@dataclass
class FakeImagePicker(ImagePickerProvider):
    """Picker returning a fixed result and recording the requested source."""

    result: bytes | None = b"picked-image"
    sources: list[PickerSource] = field(default_factory=list)

    def pick(self, source: PickerSource) -> bytes | None:
        self.sources.append(source)
        return self.result


@dataclass
class FakeCaptureProvider(ImageCaptureProvider):
    """Capture provider that lets tests push decoded codes."""

    on_result: object | None = None
    formats: frozenset[BarcodeFormat] | None = None
    running: bool = False
    stops: int = 0

    def start_session(self, on_result, formats) -> None:  # type: ignore[no-untyped-def]
        self.on_result = on_result
        self.formats = formats
        self.running = True

    def stop_session(self) -> None:
        self.running = False
        self.stops += 1

    def emit(self, code: str) -> None:
        assert callable(self.on_result)
        self.on_result(code)


def png_bytes(size: tuple[int, int] = (8, 8), mode: str = "RGBA") -> bytes:
    """Return a small PNG image."""
    buffer = BytesIO()
    Image.new(mode, size, color=(200, 30, 30, 255)[: len(mode)]).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture
def repository() -> InMemorySneakerRepository:
    return InMemorySneakerRepository()


@pytest.fixture
def record_store(repository: InMemorySneakerRepository) -> RecordStore:
    return RecordStore(repository)


@pytest.fixture
def view_service(record_store: RecordStore) -> ViewService:
    return ViewService(record_store)


@pytest.fixture
def transfer_service(record_store: RecordStore) -> TransferService:
    return TransferService(record_store)


@pytest.fixture
def container(settings: Settings, record_store: RecordStore) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        record_store=record_store,
        view_service=ViewService(record_store),
        transfer_service=TransferService(record_store),
        photo_service=PhotoService(store=record_store, codec=FakePhotoCodec()),
        scanner_service=None,
        close_resources=close_resources,
    )


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("sneaker_inventory")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
