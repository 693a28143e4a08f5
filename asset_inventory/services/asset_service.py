from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from asset_inventory.errors import AssetInventoryError, ConflictError, NotFoundError
from asset_inventory.models import Asset, CodeType, next_timestamp, utcnow
from asset_inventory.schemas import AssetCreate, AssetUpdate
from asset_inventory.services.identity_codec import (
    code_image_url,
    creation_barcode_payload,
    creation_qr_payload,
    shared_code_payload,
)
from asset_inventory.services.query_service import get_asset
from asset_inventory.services.validation_service import UNIQUE_FIELDS, ensure_asset, validate_create, validate_update

logger = logging.getLogger(__name__)

CODE_TARGET_FIELDS = {
    CodeType.BARCODE: 'barcode_data',
    CodeType.QR: 'qr_code_data',
}


@dataclass(frozen=True)
class CodeResult:
    data: str
    image_url: str


UNIQUE_CONSTRAINTS = {f'uq_assets_{field}': field for field in UNIQUE_FIELDS}


def _violated_unique_field(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, 'diag', None)
    constraint_name = getattr(diag, 'constraint_name', None)
    if constraint_name:
        return UNIQUE_CONSTRAINTS.get(constraint_name)
    # sqlite only reports "UNIQUE constraint failed: assets.<column>"
    message = str(exc.orig)
    if not message.startswith('UNIQUE constraint failed'):
        return None
    for field in UNIQUE_FIELDS:
        if f'assets.{field}' in message:
            return field
    return None


def _integrity_error_to_domain(exc: IntegrityError, values: dict) -> AssetInventoryError | None:
    field = _violated_unique_field(exc)
    if field is not None:
        return ConflictError(field, values.get(field))
    if 'foreign key' in str(exc.orig).lower():
        return NotFoundError('location', values.get('location_id'))
    return None


def _flush(db: Session, values: dict) -> None:
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        mapped = _integrity_error_to_domain(exc, values)
        if mapped is None:
            raise
        logger.warning('Asset write rejected by store constraint: %s', mapped)
        raise mapped from exc


def _reload(db: Session, asset_id: int) -> Asset:
    asset = get_asset(db, asset_id)
    if asset is None:
        # FK + inner join make this unreachable unless the location row vanished mid-request.
        raise NotFoundError('location')
    return asset


def create_asset(db: Session, payload: AssetCreate) -> Asset:
    values = validate_create(db, payload)
    now = utcnow()
    asset = Asset(
        **values,
        barcode_data=creation_barcode_payload(values['asset_number']),
        qr_code_data=creation_qr_payload(
            asset_number=values['asset_number'],
            name=values['name'],
            category=values['category'],
        ),
        created_at=now,
        updated_at=now,
    )
    db.add(asset)
    _flush(db, values)
    logger.info('Created asset %s (%s)', asset.id, asset.asset_number)
    return _reload(db, asset.id)


def update_asset(db: Session, payload: AssetUpdate) -> Asset:
    validated = validate_update(db, payload)
    asset = validated.asset
    for field, value in validated.patch.items():
        setattr(asset, field, value)
    asset.updated_at = next_timestamp(asset.updated_at)
    _flush(db, validated.patch)
    logger.info('Updated asset %s fields=%s', asset.id, sorted(validated.patch))
    return _reload(db, asset.id)


def delete_asset(db: Session, asset_id: int) -> bool:
    result = db.execute(delete(Asset).where(Asset.id == asset_id))
    deleted = (result.rowcount or 0) > 0
    if deleted:
        logger.info('Deleted asset %s', asset_id)
    return deleted


def generate_code(db: Session, *, asset_id: int, code_type: CodeType) -> CodeResult:
    asset = ensure_asset(db, asset_id)
    data = shared_code_payload(
        asset_number=asset.asset_number,
        serial_number=asset.serial_number,
        name=asset.name,
    )
    setattr(asset, CODE_TARGET_FIELDS[code_type], data)
    asset.updated_at = next_timestamp(asset.updated_at)
    db.flush()
    image_url = code_image_url(code_type, asset.id)
    logger.info('Generated %s for asset %s -> %s', code_type.value, asset.id, image_url)
    return CodeResult(data=data, image_url=image_url)
