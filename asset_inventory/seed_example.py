from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from asset_inventory.db import SessionLocal, init_db
from asset_inventory.models import Asset, AssetCategory, AssetStatus, Location
from asset_inventory.schemas import AssetCreate, LocationCreate
from asset_inventory.services.asset_service import create_asset
from asset_inventory.services.location_service import create_location

logger = logging.getLogger(__name__)

ASSETS_PER_CATEGORY = 5

SAMPLE_LOCATIONS = [
    ('Main Office', 'Head office, ground floor'),
    ('IT Room', 'Server and network equipment room'),
    ('Warehouse', 'Central storage'),
    ('Branch Office', 'Regional branch'),
    ('Meeting Room', 'Shared meeting space, 2nd floor'),
]

CATEGORY_CODES = {
    AssetCategory.KOMPUTER: ('KOM', ['Dell', 'HP', 'Lenovo']),
    AssetCategory.MONITOR: ('MON', ['LG', 'Samsung', 'Dell']),
    AssetCategory.PRINTER: ('PRN', ['Epson', 'Canon', 'Brother']),
    AssetCategory.PRINTER_THERMAL: ('PTH', ['Zebra', 'Epson', 'Xprinter']),
    AssetCategory.UPS: ('UPS', ['APC', 'ICA', 'Prolink']),
    AssetCategory.SCANNER: ('SCN', ['Fujitsu', 'Canon', 'Epson']),
    AssetCategory.GADGET: ('GDG', ['Samsung', 'Apple', 'Xiaomi']),
    AssetCategory.SWITCH: ('SWT', ['Cisco', 'TP-Link', 'D-Link']),
    AssetCategory.FACE_RECOGNITION: ('FRC', ['ZKTeco', 'Hikvision', 'Suprema']),
    AssetCategory.FINGER_PRINT: ('FPR', ['ZKTeco', 'Solution', 'Fingerspot']),
    AssetCategory.HARDDISK: ('HDD', ['WD', 'Seagate', 'Toshiba']),
    AssetCategory.CAMERA_DIGITAL: ('CAM', ['Canon', 'Nikon', 'Sony']),
    AssetCategory.LCD_PROJECTOR: ('LCD', ['Epson', 'BenQ', 'Optoma']),
    AssetCategory.MIKROTIK: ('MKT', ['MikroTik']),
    AssetCategory.NFC_READER: ('NFC', ['ACS', 'Identiv', 'HID']),
    AssetCategory.POWER_BANK: ('PWB', ['Anker', 'Xiaomi', 'Robot']),
    AssetCategory.STAVOLT: ('STV', ['Matsunaga', 'Yunika', 'Orimax']),
    AssetCategory.WIRELESS: ('WLS', ['Ubiquiti', 'TP-Link', 'Ruckus']),
}

STATUS_ROTATION = [
    AssetStatus.ACTIVE,
    AssetStatus.ACTIVE,
    AssetStatus.ACTIVE,
    AssetStatus.MAINTENANCE,
    AssetStatus.INACTIVE,
    AssetStatus.ACTIVE,
    AssetStatus.DISPOSED,
]


@dataclass(frozen=True)
class SeedResult:
    message: str
    count: int


def _sample_asset(category: AssetCategory, index: int, ordinal: int, location_id: int) -> AssetCreate:
    code, brands = CATEGORY_CODES[category]
    brand = brands[index % len(brands)]
    purchased = date(2022, 1, 1) + timedelta(days=(ordinal * 11) % 900)
    return AssetCreate(
        asset_number=f'AST-{code}-{index + 1:03d}',
        serial_number=f'SN-{code}-{ordinal:05d}',
        name=f'{category.value} {brand} #{index + 1}',
        category=category,
        brand=brand,
        model=f'{code}-{100 + index * 10}',
        purchase_date=purchased,
        purchase_price=Decimal(250 + (ordinal * 37) % 4750) + Decimal('0.50'),
        warranty_expiry=purchased + timedelta(days=365 * (1 + index % 3)),
        location_id=location_id,
        status=STATUS_ROTATION[ordinal % len(STATUS_ROTATION)],
    )


def seed_dummy_data(db: Session) -> SeedResult:
    existing = db.execute(select(func.count(Asset.id))).scalar_one()
    if existing:
        return SeedResult(message='Database already contains assets; nothing seeded', count=0)

    locations = db.execute(select(Location).order_by(Location.id.asc())).scalars().all()
    if not locations:
        locations = [
            create_location(db, LocationCreate(name=name, description=description))
            for name, description in SAMPLE_LOCATIONS
        ]

    count = 0
    for category in AssetCategory:
        for index in range(ASSETS_PER_CATEGORY):
            location = locations[count % len(locations)]
            create_asset(db, _sample_asset(category, index, count, location.id))
            count += 1

    logger.info('Seeded %d assets across %d locations', count, len(locations))
    return SeedResult(message='Dummy data seeded successfully', count=count)


def seed() -> SeedResult:
    init_db()
    with SessionLocal() as db:
        result = seed_dummy_data(db)
        db.commit()
    return result


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    outcome = seed()
    print(f'{outcome.message} ({outcome.count} assets).')
