from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.orm import Session, contains_eager

from asset_inventory.errors import InvalidInputError
from asset_inventory.models import Asset, AssetCategory, AssetStatus, Location
from asset_inventory.schemas import MAX_PAGE_SIZE, AssetListQuery

SORT_COLUMNS = {
    'name': Asset.name,
    'asset_number': Asset.asset_number,
    'category': Asset.category,
    'created_at': Asset.created_at,
}
SORT_ORDERS = ('asc', 'desc')
SEARCH_COLUMNS = (Asset.name, Asset.asset_number, Asset.serial_number)
_LIKE_ESCAPE = '\\'


@dataclass(frozen=True)
class AssetPage:
    assets: list[Asset]
    total: int
    page: int
    limit: int
    total_pages: int


def _escape_like(term: str) -> str:
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace('%', f'{_LIKE_ESCAPE}%')
        .replace('_', f'{_LIKE_ESCAPE}_')
    )


def search_clause(search: str | None) -> ColumnElement[bool] | None:
    if not search:
        return None
    pattern = f'%{_escape_like(search)}%'
    return or_(*(column.ilike(pattern, escape=_LIKE_ESCAPE) for column in SEARCH_COLUMNS))


def build_asset_filters(
    *,
    category: AssetCategory | None = None,
    location_id: int | None = None,
    status: AssetStatus | None = None,
    search: str | None = None,
) -> list[ColumnElement[bool]]:
    filters: list[ColumnElement[bool]] = []
    if category is not None:
        filters.append(Asset.category == category)
    if location_id is not None:
        filters.append(Asset.location_id == location_id)
    if status is not None:
        filters.append(Asset.status == status)
    matches = search_clause(search)
    if matches is not None:
        filters.append(matches)
    return filters


def apply_filters(query: Select, filters: list[ColumnElement[bool]]) -> Select:
    if filters:
        return query.where(and_(*filters))
    return query


def base_asset_query(filters: list[ColumnElement[bool]] | None = None) -> Select:
    query = (
        select(Asset)
        .join(Location, Location.id == Asset.location_id)
        .options(contains_eager(Asset.location))
        .execution_options(populate_existing=True)
    )
    return apply_filters(query, filters or [])


def count_assets(db: Session, filters: list[ColumnElement[bool]] | None = None) -> int:
    query = select(func.count(Asset.id)).select_from(Asset).join(Location, Location.id == Asset.location_id)
    return int(db.execute(apply_filters(query, filters or [])).scalar_one())


def page_window(page: int, limit: int) -> tuple[int, int]:
    if page < 1:
        raise InvalidInputError('page', 'must be at least 1')
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise InvalidInputError('limit', f'must be between 1 and {MAX_PAGE_SIZE}')
    return (page - 1) * limit, limit


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return -(-total // limit)


def order_clause(sort_by: str, sort_order: str) -> tuple:
    column = SORT_COLUMNS.get(sort_by)
    if column is None:
        raise InvalidInputError('sort_by', f"must be one of {', '.join(SORT_COLUMNS)}")
    if sort_order not in SORT_ORDERS:
        raise InvalidInputError('sort_order', "must be 'asc' or 'desc'")
    if sort_order == 'asc':
        return column.asc(), Asset.id.asc()
    return column.desc(), Asset.id.desc()


def list_assets(db: Session, query: AssetListQuery) -> AssetPage:
    offset, limit = page_window(query.page, query.limit)
    filters = build_asset_filters(
        category=query.category,
        location_id=query.location_id,
        status=query.status,
        search=query.search,
    )
    rows = (
        db.execute(
            base_asset_query(filters)
            .order_by(*order_clause(query.sort_by, query.sort_order))
            .offset(offset)
            .limit(limit)
        )
        .scalars()
        .all()
    )
    total = count_assets(db, filters)
    return AssetPage(
        assets=list(rows),
        total=total,
        page=query.page,
        limit=limit,
        total_pages=total_pages(total, limit),
    )


def get_asset(db: Session, asset_id: int) -> Asset | None:
    return db.execute(base_asset_query([Asset.id == asset_id])).scalar_one_or_none()


def get_assets_by_category(db: Session, category: AssetCategory) -> list[Asset]:
    rows = db.execute(
        base_asset_query(build_asset_filters(category=category)).order_by(Asset.created_at.desc(), Asset.id.desc())
    ).scalars()
    return list(rows.all())
