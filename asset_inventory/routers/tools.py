from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from asset_inventory.db import get_db
from asset_inventory.schemas import (
    CodeResponse,
    ExportReportInput,
    ExportReportResponse,
    GenerateCodeInput,
    SeedResponse,
)
from asset_inventory.seed_example import seed_dummy_data
from asset_inventory.services.asset_service import generate_code
from asset_inventory.services.report_service import export_report

router = APIRouter(tags=['tools'])


@router.post('/codes', response_model=CodeResponse)
def generate_code_endpoint(payload: GenerateCodeInput, db: Session = Depends(get_db)):
    result = generate_code(db, asset_id=payload.asset_id, code_type=payload.type)
    db.commit()
    return CodeResponse.model_validate(result)


@router.post('/reports/export', response_model=ExportReportResponse)
def export_report_endpoint(payload: ExportReportInput, db: Session = Depends(get_db)):
    return ExportReportResponse.model_validate(export_report(db, payload))


@router.post('/seed', response_model=SeedResponse)
def seed_endpoint(db: Session = Depends(get_db)):
    result = seed_dummy_data(db)
    db.commit()
    return SeedResponse.model_validate(result)
