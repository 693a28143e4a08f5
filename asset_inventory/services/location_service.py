from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from asset_inventory.errors import InvalidInputError
from asset_inventory.models import Location
from asset_inventory.schemas import LocationCreate

logger = logging.getLogger(__name__)


def create_location(db: Session, payload: LocationCreate) -> Location:
    name = payload.name.strip()
    if not name:
        raise InvalidInputError('name', 'is required')
    description = payload.description.strip() if payload.description and payload.description.strip() else None

    location = Location(name=name, description=description)
    db.add(location)
    db.flush()
    db.refresh(location)
    logger.info('Created location %s (%s)', location.id, location.name)
    return location


def list_locations(db: Session) -> list[Location]:
    return list(db.execute(select(Location).order_by(Location.name.asc(), Location.id.asc())).scalars().all())


def get_location(db: Session, location_id: int) -> Location | None:
    return db.execute(select(Location).where(Location.id == location_id)).scalar_one_or_none()
