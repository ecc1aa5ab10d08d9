"""Barcode and QR scanning sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from sneaker_inventory.domain.capture import ALL_BARCODE_FORMATS, BarcodeFormat

logger = logging.getLogger(__name__)

CodeCallback = Callable[[str], None]


class ImageCaptureProvider(Protocol):
    """Interface for the camera pipeline that decodes machine-readable codes."""

    def start_session(
        self, on_result: CodeCallback, formats: frozenset[BarcodeFormat]
    ) -> None:
        """Start capturing and invoke on_result for each recognized code."""

    def stop_session(self) -> None:
        """Stop capturing."""


@dataclass
class ScanSession:
    """One capture session that hands at most one code to its consumer."""

    provider: ImageCaptureProvider
    on_code: CodeCallback
    active: bool = True

    def deliver(self, code: str) -> None:
        """Accept a decoded code from the provider."""
        if not self.active:
            return
        self.active = False
        self.provider.stop_session()
        self.on_code(code)

    def dismiss(self) -> None:
        """Close the session without delivering anything."""
        if not self.active:
            return
        self.active = False
        self.provider.stop_session()


@dataclass
class ScannerService:
    """Opens scan sessions and remembers the last scanned code."""

    provider: ImageCaptureProvider
    formats: frozenset[BarcodeFormat] = field(default=ALL_BARCODE_FORMATS)
    last_code: str | None = None
    _current: ScanSession | None = field(default=None, init=False, repr=False)

    def start(self, on_code: CodeCallback | None = None) -> ScanSession:
        """Start a scan session; the code is opaque text, never looked up."""

        def handle(code: str) -> None:
            self.last_code = code
            logger.info("Scanned code of length %d", len(code))
            if on_code is not None:
                on_code(code)

        if self._current is not None:
            self._current.dismiss()
        session = ScanSession(provider=self.provider, on_code=handle)
        self._current = session
        self.provider.start_session(session.deliver, self.formats)
        return session
