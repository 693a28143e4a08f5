from __future__ import annotations

import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from asset_inventory.db import enable_sqlite_foreign_keys
from asset_inventory.models import AssetCategory, AssetStatus, Base, Location
from asset_inventory.schemas import AssetCreate


def make_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db: Session = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def add_location(self, name: str = 'Main Office', description: str | None = None) -> Location:
        location = Location(name=name, description=description)
        self.db.add(location)
        self.db.commit()
        return location

    def asset_input(self, location_id: int, number: str = '001', **overrides) -> AssetCreate:
        values = {
            'asset_number': f'AST-{number}',
            'serial_number': f'SN-{number}',
            'name': f'Test Computer {number}',
            'category': AssetCategory.KOMPUTER,
            'location_id': location_id,
            'status': AssetStatus.ACTIVE,
        }
        values.update(overrides)
        return AssetCreate(**values)

