"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from sneaker_inventory.adapters.pillow_photo_codec import PillowPhotoCodec
from sneaker_inventory.adapters.sqlalchemy_sneaker_repository import (
    SqlAlchemySneakerRepository,
    create_database_engine,
)
from sneaker_inventory.config import Settings, parse_scan_formats
from sneaker_inventory.domain.capture import ALL_BARCODE_FORMATS
from sneaker_inventory.services.photos import PhotoService
from sneaker_inventory.services.records import RecordStore
from sneaker_inventory.services.scanner import ImageCaptureProvider, ScannerService
from sneaker_inventory.services.transfer import TransferService
from sneaker_inventory.services.views import ViewService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_store: RecordStore
    view_service: ViewService
    transfer_service: TransferService
    photo_service: PhotoService
    scanner_service: ScannerService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    capture_provider: ImageCaptureProvider | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    engine = create_database_engine(resolved_settings.database_url)
    repository = SqlAlchemySneakerRepository.create(engine)
    record_store = RecordStore(repository)
    photo_service = PhotoService(
        store=record_store,
        codec=PillowPhotoCodec(
            quality=resolved_settings.photo_quality,
            max_dimension=resolved_settings.photo_max_dimension,
        ),
    )
    scanner_service = None
    if capture_provider is not None:
        scanner_service = ScannerService(
            provider=capture_provider,
            formats=parse_scan_formats(resolved_settings.scan_formats)
            or ALL_BARCODE_FORMATS,
        )

    async def close_resources() -> None:
        engine.dispose()

    return AppContainer(
        settings=resolved_settings,
        record_store=record_store,
        view_service=ViewService(record_store),
        transfer_service=TransferService(record_store),
        photo_service=photo_service,
        scanner_service=scanner_service,
        close_resources=close_resources,
    )
