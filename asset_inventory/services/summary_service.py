from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from asset_inventory.config import settings
from asset_inventory.models import Asset, AssetCategory, AssetStatus, Location
from asset_inventory.services.query_service import apply_filters, base_asset_query, count_assets


@dataclass(frozen=True)
class CategoryCountRow:
    category: AssetCategory
    count: int


@dataclass(frozen=True)
class StatusCountRow:
    status: AssetStatus
    count: int


@dataclass(frozen=True)
class AssetSummary:
    total_assets: int
    categories: list[CategoryCountRow]
    status_counts: list[StatusCountRow]
    recent_assets: list[Asset]


def _grouped_counts(db: Session, column, filters: list[ColumnElement[bool]] | None) -> list[tuple]:
    query = (
        select(column, func.count(Asset.id))
        .select_from(Asset)
        .join(Location, Location.id == Asset.location_id)
    )
    query = apply_filters(query, filters or []).group_by(column).order_by(column.asc())
    return [(label, int(count)) for label, count in db.execute(query).all() if count]


def count_by_category(db: Session, filters: list[ColumnElement[bool]] | None = None) -> list[CategoryCountRow]:
    return [
        CategoryCountRow(category=AssetCategory(label), count=count)
        for label, count in _grouped_counts(db, Asset.category, filters)
    ]


def count_by_status(db: Session, filters: list[ColumnElement[bool]] | None = None) -> list[StatusCountRow]:
    return [
        StatusCountRow(status=AssetStatus(label), count=count)
        for label, count in _grouped_counts(db, Asset.status, filters)
    ]


def recent_assets(db: Session, *, limit: int | None = None) -> list[Asset]:
    size = settings.summary_recent_limit if limit is None else limit
    rows = db.execute(
        base_asset_query().order_by(Asset.created_at.desc(), Asset.id.desc()).limit(size)
    ).scalars()
    return list(rows.all())


def get_asset_summary(db: Session) -> AssetSummary:
    # Dashboard scope: always the whole collection, never a filtered view.
    return AssetSummary(
        total_assets=count_assets(db),
        categories=count_by_category(db),
        status_counts=count_by_status(db),
        recent_assets=recent_assets(db),
    )
