from __future__ import annotations

import json
import secrets
from datetime import datetime, timezone

from asset_inventory.config import settings
from asset_inventory.models import AssetCategory, CodeType, ReportFormat

CREATION_BARCODE_PREFIX = 'ASSET-'


def _category_label(category: AssetCategory | str) -> str:
    return category.value if isinstance(category, AssetCategory) else str(category)


def _unique_token() -> str:
    return secrets.token_hex(4)


def creation_barcode_payload(asset_number: str) -> str:
    return f'{CREATION_BARCODE_PREFIX}{asset_number}'


def creation_qr_payload(*, asset_number: str, name: str, category: AssetCategory | str) -> str:
    return json.dumps(
        {
            'asset_number': asset_number,
            'name': name,
            'category': _category_label(category),
        }
    )


def shared_code_payload(*, asset_number: str, serial_number: str, name: str) -> str:
    # Barcode and QR regeneration encode the same string; only the target column differs.
    return f'{asset_number}-{serial_number}-{name}'


def code_image_url(code_type: CodeType, asset_id: int, *, now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    epoch_ms = int(moment.timestamp() * 1000)
    prefix = settings.code_image_url_prefix.rstrip('/')
    return f'{prefix}/{code_type.value}-{asset_id}-{epoch_ms}-{_unique_token()}.png'


def report_filename(report_format: ReportFormat, *, now: datetime | None = None) -> str:
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.strftime('%Y-%m-%dT%H-%M-%S')
    return f'asset-report-{stamp}-{_unique_token()}.{report_format.value}'


def report_file_url(filename: str) -> str:
    return f"{settings.report_url_prefix.rstrip('/')}/{filename}"
