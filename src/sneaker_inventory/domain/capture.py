"""Domain models for capture adapters."""

import enum


class BarcodeFormat(str, enum.Enum):
    EAN8 = "ean8"
    EAN13 = "ean13"
    PDF417 = "pdf417"
    QR = "qr"
    CODE128 = "code128"
    CODE39 = "code39"
    CODE93 = "code93"
    UPCE = "upce"


class PickerSource(str, enum.Enum):
    CAMERA = "camera"
    LIBRARY = "library"


ALL_BARCODE_FORMATS = frozenset(BarcodeFormat)
