from __future__ import annotations

import json
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from asset_inventory.models import AssetCategory, CodeType, ReportFormat
from asset_inventory.services.identity_codec import (
    code_image_url,
    creation_barcode_payload,
    creation_qr_payload,
    report_file_url,
    report_filename,
    shared_code_payload,
)


class IdentityCodecTests(unittest.TestCase):
    def test_creation_barcode_is_prefixed_asset_number(self) -> None:
        self.assertEqual(creation_barcode_payload('AST-001'), 'ASSET-AST-001')

    def test_creation_qr_payload_is_json_with_identity_fields(self) -> None:
        payload = json.loads(
            creation_qr_payload(asset_number='AST-001', name='Test Computer', category=AssetCategory.PRINTER_THERMAL)
        )
        self.assertEqual(
            payload,
            {'asset_number': 'AST-001', 'name': 'Test Computer', 'category': 'Printer Thermal'},
        )

    def test_shared_payload_joins_number_serial_and_name(self) -> None:
        self.assertEqual(
            shared_code_payload(asset_number='AST-001', serial_number='SN-001', name='Test Computer'),
            'AST-001-SN-001-Test Computer',
        )

    def test_image_url_uses_code_type_prefix(self) -> None:
        moment = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        with patch('asset_inventory.services.identity_codec._unique_token', return_value='abcd1234'):
            barcode_url = code_image_url(CodeType.BARCODE, 7, now=moment)
            qr_url = code_image_url(CodeType.QR, 7, now=moment)
        self.assertEqual(barcode_url, f'/assets/codes/barcode-7-{int(moment.timestamp() * 1000)}-abcd1234.png')
        self.assertTrue(qr_url.startswith('/assets/codes/qr-7-'))

    def test_image_urls_differ_for_repeated_requests(self) -> None:
        moment = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        first = code_image_url(CodeType.QR, 7, now=moment)
        second = code_image_url(CodeType.QR, 7, now=moment)
        self.assertNotEqual(first, second)

    def test_report_filename_carries_timestamp_and_extension(self) -> None:
        moment = datetime(2024, 5, 1, 8, 30, 15, tzinfo=timezone.utc)
        with patch('asset_inventory.services.identity_codec._unique_token', return_value='0f0f0f0f'):
            filename = report_filename(ReportFormat.XLSX, now=moment)
        self.assertEqual(filename, 'asset-report-2024-05-01T08-30-15-0f0f0f0f.xlsx')
        self.assertEqual(report_file_url(filename), '/reports/asset-report-2024-05-01T08-30-15-0f0f0f0f.xlsx')

    def test_report_filenames_are_unique_within_the_same_second(self) -> None:
        moment = datetime(2024, 5, 1, 8, 30, 15, tzinfo=timezone.utc)
        names = {report_filename(ReportFormat.PDF, now=moment) for _ in range(20)}
        self.assertEqual(len(names), 20)


if __name__ == '__main__':
    unittest.main()
