from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from asset_inventory.models import Asset, ReportFormat
from asset_inventory.schemas import ExportReportInput
from asset_inventory.services.identity_codec import report_file_url, report_filename
from asset_inventory.services.query_service import base_asset_query, build_asset_filters
from asset_inventory.services.summary_service import (
    CategoryCountRow,
    StatusCountRow,
    count_by_category,
    count_by_status,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSummary:
    total_assets: int
    categories: list[CategoryCountRow]
    status_counts: list[StatusCountRow]


@dataclass(frozen=True)
class ReportData:
    assets: list[Asset]
    summary: ReportSummary | None


@dataclass(frozen=True)
class ReportDescriptor:
    """Everything an external PDF/XLSX generator needs to render one report."""

    filename: str
    file_url: str
    format: ReportFormat
    generated_at: datetime
    data: ReportData


def export_report(db: Session, payload: ExportReportInput) -> ReportDescriptor:
    # Search, sort and paging are listing concerns; reports filter on the three equality fields only.
    filters = build_asset_filters(
        category=payload.category,
        location_id=payload.location_id,
        status=payload.status,
    )
    assets = list(
        db.execute(base_asset_query(filters).order_by(Asset.asset_number.asc(), Asset.id.asc())).scalars().all()
    )

    summary = None
    if payload.include_summary:
        summary = ReportSummary(
            total_assets=len(assets),
            categories=count_by_category(db, filters),
            status_counts=count_by_status(db, filters),
        )

    generated_at = datetime.now(timezone.utc)
    filename = report_filename(payload.format, now=generated_at)
    logger.info('Prepared %s report %s with %d assets', payload.format.value, filename, len(assets))
    return ReportDescriptor(
        filename=filename,
        file_url=report_file_url(filename),
        format=payload.format,
        generated_at=generated_at,
        data=ReportData(assets=assets, summary=summary),
    )
