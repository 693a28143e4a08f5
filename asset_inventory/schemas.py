"""Request/response schemas for the asset inventory API."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from asset_inventory.models import AssetCategory, AssetStatus, CodeType, ReportFormat

MAX_PAGE_SIZE = 100

SortField = Literal['name', 'asset_number', 'category', 'created_at']
SortOrder = Literal['asc', 'desc']


class LocationCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    created_at: datetime


class AssetCreate(BaseModel):
    asset_number: str = Field(min_length=1)
    serial_number: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    category: AssetCategory
    brand: str | None = None
    model: str | None = None
    purchase_date: date | None = None
    purchase_price: Decimal | None = Field(default=None, gt=0)
    warranty_expiry: date | None = None
    location_id: int = Field(gt=0)
    status: AssetStatus = AssetStatus.ACTIVE
    notes: str | None = None


class AssetUpdate(BaseModel):
    """Partial update.

    Only fields present in the request body are applied; a field sent as
    ``null`` clears the stored value, a field left out keeps it. The split is
    read from ``model_fields_set``.
    """

    id: int
    asset_number: str | None = Field(default=None, min_length=1)
    serial_number: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: AssetCategory | None = None
    brand: str | None = None
    model: str | None = None
    purchase_date: date | None = None
    purchase_price: Decimal | None = Field(default=None, gt=0)
    warranty_expiry: date | None = None
    location_id: int | None = Field(default=None, gt=0)
    status: AssetStatus | None = None
    notes: str | None = None

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={'id'})


class AssetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_number: str
    serial_number: str
    name: str
    description: str | None
    category: AssetCategory
    brand: str | None
    model: str | None
    purchase_date: date | None
    purchase_price: float | None
    warranty_expiry: date | None
    location_id: int
    status: AssetStatus
    barcode_data: str | None
    qr_code_data: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    location: LocationOut

    @field_validator('purchase_price', mode='before')
    @classmethod
    def _price_to_float(cls, value: object) -> object:
        if isinstance(value, Decimal):
            return float(value)
        return value


class AssetListQuery(BaseModel):
    category: AssetCategory | None = None
    location_id: int | None = None
    status: AssetStatus | None = None
    search: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)
    sort_by: SortField = 'created_at'
    sort_order: SortOrder = 'desc'


class AssetListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    assets: list[AssetOut]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias='totalPages')


class CategoryCount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: AssetCategory
    count: int


class StatusCount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: AssetStatus
    count: int


class AssetSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_assets: int
    categories: list[CategoryCount]
    status_counts: list[StatusCount]
    recent_assets: list[AssetOut]


class GenerateCodeInput(BaseModel):
    asset_id: int = Field(gt=0)
    type: CodeType


class CodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    data: str
    image_url: str


class ExportReportInput(BaseModel):
    category: AssetCategory | None = None
    location_id: int | None = None
    status: AssetStatus | None = None
    format: ReportFormat
    include_summary: bool = True


class ReportSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_assets: int
    categories: list[CategoryCount]
    status_counts: list[StatusCount]


class ReportDataOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    assets: list[AssetOut]
    summary: ReportSummaryOut | None = None


class ExportReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    file_url: str
    filename: str
    format: ReportFormat
    generated_at: datetime
    data: ReportDataOut


class SeedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message: str
    count: int
