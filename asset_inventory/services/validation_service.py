from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sqlalchemy import select
from sqlalchemy.orm import Session

from asset_inventory.errors import ConflictError, InvalidInputError, NotFoundError
from asset_inventory.models import Asset, Location
from asset_inventory.schemas import AssetCreate, AssetUpdate
from asset_inventory.services.location_service import get_location

REQUIRED_TEXT_FIELDS = ('asset_number', 'serial_number', 'name')
NON_NULLABLE_FIELDS = REQUIRED_TEXT_FIELDS + ('category', 'location_id', 'status')
UNIQUE_FIELDS = ('asset_number', 'serial_number')
PRICE_QUANTUM = Decimal('0.01')


@dataclass(frozen=True)
class ValidatedUpdate:
    asset: Asset
    patch: dict


def normalize_price(value: object) -> Decimal | None:
    if value is None:
        return None
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidInputError('purchase_price', 'must be a number') from exc
    if not price.is_finite() or price <= 0:
        raise InvalidInputError('purchase_price', 'must be greater than zero')
    return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def _require_text(field: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field, 'is required')
    return value


def ensure_location(db: Session, location_id: int) -> Location:
    location = get_location(db, location_id)
    if not location:
        raise NotFoundError('location', location_id)
    return location


def ensure_asset(db: Session, asset_id: int) -> Asset:
    asset = db.execute(select(Asset).where(Asset.id == asset_id)).scalar_one_or_none()
    if not asset:
        raise NotFoundError('asset', asset_id)
    return asset


def ensure_unique(db: Session, *, field: str, value: str, exclude_asset_id: int | None = None) -> None:
    column = getattr(Asset, field)
    query = select(Asset.id).where(column == value)
    if exclude_asset_id is not None:
        query = query.where(Asset.id != exclude_asset_id)
    if db.execute(query.limit(1)).scalar_one_or_none() is not None:
        raise ConflictError(field, value)


def validate_create(db: Session, payload: AssetCreate) -> dict:
    values = payload.model_dump()
    for field in REQUIRED_TEXT_FIELDS:
        _require_text(field, values[field])
    values['purchase_price'] = normalize_price(values.get('purchase_price'))
    ensure_location(db, values['location_id'])
    return values


def validate_update(db: Session, payload: AssetUpdate) -> ValidatedUpdate:
    asset = ensure_asset(db, payload.id)
    patch = payload.patch()

    for field in NON_NULLABLE_FIELDS:
        if field in patch and patch[field] is None:
            raise InvalidInputError(field, 'cannot be null')
    for field in REQUIRED_TEXT_FIELDS:
        if field in patch:
            _require_text(field, patch[field])
    if 'purchase_price' in patch:
        patch['purchase_price'] = normalize_price(patch['purchase_price'])

    if 'location_id' in patch:
        ensure_location(db, patch['location_id'])
    for field in UNIQUE_FIELDS:
        if field in patch:
            ensure_unique(db, field=field, value=patch[field], exclude_asset_id=asset.id)

    return ValidatedUpdate(asset=asset, patch=patch)
