from __future__ import annotations

import unittest

from sqlalchemy import text

from asset_inventory.errors import InvalidInputError
from asset_inventory.models import AssetCategory, AssetStatus
from asset_inventory.schemas import AssetListQuery
from asset_inventory.services.asset_service import create_asset
from asset_inventory.services.query_service import (
    build_asset_filters,
    get_asset,
    get_assets_by_category,
    list_assets,
    page_window,
    total_pages,
)
from asset_inventory.services.summary_service import get_asset_summary
from tests.support import DatabaseTestCase


class PaginationMathTests(unittest.TestCase):
    def test_page_window_offsets_by_page(self) -> None:
        self.assertEqual(page_window(1, 10), (0, 10))
        self.assertEqual(page_window(3, 25), (50, 25))

    def test_page_window_rejects_out_of_range_values(self) -> None:
        with self.assertRaises(InvalidInputError):
            page_window(0, 10)
        with self.assertRaises(InvalidInputError):
            page_window(1, 0)
        with self.assertRaises(InvalidInputError):
            page_window(1, 101)

    def test_total_pages_rounds_up_and_is_zero_when_empty(self) -> None:
        self.assertEqual(total_pages(0, 10), 0)
        self.assertEqual(total_pages(1, 10), 1)
        self.assertEqual(total_pages(10, 10), 1)
        self.assertEqual(total_pages(11, 10), 2)

    def test_absent_filters_produce_no_predicates(self) -> None:
        self.assertEqual(build_asset_filters(), [])
        self.assertEqual(build_asset_filters(search='   '), [])

    def test_each_present_filter_contributes_one_predicate(self) -> None:
        filters = build_asset_filters(
            category=AssetCategory.MONITOR,
            location_id=3,
            status=AssetStatus.ACTIVE,
            search='dell',
        )
        self.assertEqual(len(filters), 4)


class ListAssetsTests(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.office = self.add_location('Main Office')
        self.lab = self.add_location('Lab')
        create_asset(self.db, self.asset_input(self.office.id, '001', name='Alpha Laptop'))
        create_asset(
            self.db,
            self.asset_input(
                self.office.id,
                '002',
                name='Bravo Monitor',
                category=AssetCategory.MONITOR,
                status=AssetStatus.MAINTENANCE,
            ),
        )
        create_asset(
            self.db,
            self.asset_input(self.lab.id, '003', name='Charlie Monitor', category=AssetCategory.MONITOR),
        )
        create_asset(
            self.db,
            self.asset_input(self.lab.id, '004', name='Delta Desktop', serial_number='XYZ-UNIQUE-SERIAL'),
        )
        self.db.commit()

    def test_unfiltered_listing_returns_everything_newest_first(self) -> None:
        page = list_assets(self.db, AssetListQuery())
        self.assertEqual(page.total, 4)
        self.assertEqual(page.total_pages, 1)
        self.assertEqual([asset.asset_number for asset in page.assets], ['AST-004', 'AST-003', 'AST-002', 'AST-001'])

    def test_filters_are_conjunctive(self) -> None:
        page = list_assets(self.db, AssetListQuery(category=AssetCategory.MONITOR, status=AssetStatus.ACTIVE))
        self.assertEqual([asset.asset_number for asset in page.assets], ['AST-003'])
        self.assertEqual(page.total, 1)

    def test_location_filter(self) -> None:
        page = list_assets(self.db, AssetListQuery(location_id=self.lab.id))
        self.assertEqual({asset.asset_number for asset in page.assets}, {'AST-003', 'AST-004'})
        self.assertTrue(all(asset.location.name == 'Lab' for asset in page.assets))

    def test_search_matches_serial_number_only_rows(self) -> None:
        page = list_assets(self.db, AssetListQuery(search='UNIQUE-SERIAL'))
        self.assertEqual([asset.asset_number for asset in page.assets], ['AST-004'])

    def test_search_is_or_across_fields_and_anded_with_filters(self) -> None:
        page = list_assets(self.db, AssetListQuery(search='monitor', location_id=self.office.id))
        self.assertEqual([asset.asset_number for asset in page.assets], ['AST-002'])

    def test_search_treats_wildcards_literally(self) -> None:
        page = list_assets(self.db, AssetListQuery(search='%'))
        self.assertEqual(page.total, 0)
        self.assertEqual(page.total_pages, 0)
        self.assertEqual(page.assets, [])

    def test_search_term_is_matched_without_trimming(self) -> None:
        self.assertEqual(list_assets(self.db, AssetListQuery(search=' Monitor')).total, 2)
        self.assertEqual(list_assets(self.db, AssetListQuery(search='Monitor ')).total, 0)
        self.assertEqual(list_assets(self.db, AssetListQuery(search='')).total, 4)

    def test_pagination_window_and_count_share_predicates(self) -> None:
        first = list_assets(self.db, AssetListQuery(limit=3, page=1, sort_by='asset_number', sort_order='asc'))
        second = list_assets(self.db, AssetListQuery(limit=3, page=2, sort_by='asset_number', sort_order='asc'))
        self.assertEqual([asset.asset_number for asset in first.assets], ['AST-001', 'AST-002', 'AST-003'])
        self.assertEqual([asset.asset_number for asset in second.assets], ['AST-004'])
        self.assertEqual(first.total, 4)
        self.assertEqual(first.total_pages, 2)
        self.assertEqual(second.page, 2)

    def test_page_past_the_end_is_empty_but_keeps_total(self) -> None:
        page = list_assets(self.db, AssetListQuery(page=5, limit=10))
        self.assertEqual(page.assets, [])
        self.assertEqual(page.total, 4)

    def test_sort_by_name_descending(self) -> None:
        page = list_assets(self.db, AssetListQuery(sort_by='name', sort_order='desc'))
        self.assertEqual(
            [asset.name for asset in page.assets],
            ['Delta Desktop', 'Charlie Monitor', 'Bravo Monitor', 'Alpha Laptop'],
        )

    def test_get_asset_joins_location(self) -> None:
        listed = list_assets(self.db, AssetListQuery(search='AST-001')).assets[0]
        asset = get_asset(self.db, listed.id)
        self.assertIsNotNone(asset)
        self.assertEqual(asset.location.name, 'Main Office')

    def test_get_asset_returns_none_for_unknown_id(self) -> None:
        self.assertIsNone(get_asset(self.db, 9999))

    def test_get_assets_by_category(self) -> None:
        monitors = get_assets_by_category(self.db, AssetCategory.MONITOR)
        self.assertEqual({asset.asset_number for asset in monitors}, {'AST-002', 'AST-003'})
        self.assertEqual(get_assets_by_category(self.db, AssetCategory.UPS), [])


class OrphanedAssetTests(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        location = self.add_location()
        self.asset = create_asset(self.db, self.asset_input(location.id, '001'))
        self.db.commit()
        with self.engine.connect() as conn:
            conn.exec_driver_sql('PRAGMA foreign_keys=OFF')
            conn.execute(text('UPDATE assets SET location_id = 777 WHERE id = :id'), {'id': self.asset.id})
            conn.commit()

    def test_listing_and_count_skip_rows_without_location(self) -> None:
        page = list_assets(self.db, AssetListQuery())
        self.assertEqual(page.total, 0)
        self.assertEqual(page.assets, [])

    def test_lookup_skips_rows_without_location(self) -> None:
        self.assertIsNone(get_asset(self.db, self.asset.id))

    def test_summary_skips_rows_without_location(self) -> None:
        summary = get_asset_summary(self.db)
        self.assertEqual(summary.total_assets, 0)
        self.assertEqual(summary.recent_assets, [])


if __name__ == '__main__':
    unittest.main()
