from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class AssetCategory(str, Enum):
    KOMPUTER = 'Komputer'
    MONITOR = 'Monitor'
    PRINTER = 'Printer'
    PRINTER_THERMAL = 'Printer Thermal'
    UPS = 'UPS'
    SCANNER = 'Scanner'
    GADGET = 'Gadget'
    SWITCH = 'Switch'
    FACE_RECOGNITION = 'Face Recognition'
    FINGER_PRINT = 'Finger Print'
    HARDDISK = 'Harddisk'
    CAMERA_DIGITAL = 'Camera Digital'
    LCD_PROJECTOR = 'LCD Projector'
    MIKROTIK = 'Mikrotik'
    NFC_READER = 'NFC Reader'
    POWER_BANK = 'Power Bank'
    STAVOLT = 'Stavolt'
    WIRELESS = 'Wireless'


class AssetStatus(str, Enum):
    ACTIVE = 'Active'
    INACTIVE = 'Inactive'
    MAINTENANCE = 'Maintenance'
    DISPOSED = 'Disposed'


class CodeType(str, Enum):
    BARCODE = 'barcode'
    QR = 'qr'


class ReportFormat(str, Enum):
    PDF = 'pdf'
    XLSX = 'xlsx'


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None) -> datetime:
    """Return "now", nudged past ``previous`` so successive writes always advance."""
    now = utcnow()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class Location(Base):
    __tablename__ = 'locations'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


class Asset(Base):
    __tablename__ = 'assets'
    __table_args__ = (
        UniqueConstraint('asset_number', name='uq_assets_asset_number'),
        UniqueConstraint('serial_number', name='uq_assets_serial_number'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    asset_number: Mapped[str] = mapped_column(Text, nullable=False)
    serial_number: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[AssetCategory] = mapped_column(
        SQLEnum(AssetCategory, name='asset_category', values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    brand: Mapped[str | None] = mapped_column(Text)
    model: Mapped[str | None] = mapped_column(Text)
    purchase_date: Mapped[date | None] = mapped_column(Date)
    purchase_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    warranty_expiry: Mapped[date | None] = mapped_column(Date)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey('locations.id'), nullable=False, index=True)
    status: Mapped[AssetStatus] = mapped_column(
        SQLEnum(AssetStatus, name='asset_status', values_callable=_enum_values),
        nullable=False,
        default=AssetStatus.ACTIVE,
        server_default=AssetStatus.ACTIVE.value,
        index=True,
    )
    barcode_data: Mapped[str | None] = mapped_column(Text)
    qr_code_data: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    # Loaded from an explicit inner join; Location keeps no collection of assets.
    location: Mapped[Location] = relationship(Location, lazy='raise', innerjoin=True)
