from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from asset_inventory.db import get_db
from asset_inventory.schemas import LocationCreate, LocationOut
from asset_inventory.services.location_service import create_location, list_locations

router = APIRouter(prefix='/locations', tags=['locations'])


@router.get('', response_model=list[LocationOut])
def locations(db: Session = Depends(get_db)):
    return list_locations(db)


@router.post('', response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location_endpoint(payload: LocationCreate, db: Session = Depends(get_db)):
    location = create_location(db, payload)
    db.commit()
    return location
