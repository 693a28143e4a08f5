from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from asset_inventory.db import get_db
from asset_inventory.models import AssetCategory
from asset_inventory.schemas import (
    AssetCreate,
    AssetListQuery,
    AssetListResponse,
    AssetOut,
    AssetSummaryOut,
    AssetUpdate,
)
from asset_inventory.services.asset_service import create_asset, delete_asset, update_asset
from asset_inventory.services.query_service import get_asset, get_assets_by_category, list_assets
from asset_inventory.services.summary_service import get_asset_summary

router = APIRouter(prefix='/assets', tags=['assets'])


@router.get('', response_model=AssetListResponse)
def list_assets_endpoint(
    params: Annotated[AssetListQuery, Query()],
    db: Session = Depends(get_db),
):
    return AssetListResponse.model_validate(list_assets(db, params))


@router.get('/summary', response_model=AssetSummaryOut)
def asset_summary(db: Session = Depends(get_db)):
    return AssetSummaryOut.model_validate(get_asset_summary(db))


@router.get('/category/{category}', response_model=list[AssetOut])
def assets_by_category(category: AssetCategory, db: Session = Depends(get_db)):
    return get_assets_by_category(db, category)


@router.get('/{asset_id}', response_model=AssetOut)
def asset_detail(asset_id: int, db: Session = Depends(get_db)):
    asset = get_asset(db, asset_id)
    if not asset:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Asset not found')
    return asset


@router.post('', response_model=AssetOut, status_code=status.HTTP_201_CREATED)
def create_asset_endpoint(payload: AssetCreate, db: Session = Depends(get_db)):
    asset = create_asset(db, payload)
    db.commit()
    return asset


@router.put('', response_model=AssetOut)
def update_asset_endpoint(payload: AssetUpdate, db: Session = Depends(get_db)):
    asset = update_asset(db, payload)
    db.commit()
    return asset


@router.delete('/{asset_id}')
def delete_asset_endpoint(asset_id: int, db: Session = Depends(get_db)) -> dict:
    deleted = delete_asset(db, asset_id)
    db.commit()
    return {'deleted': deleted}
