"""
tests/test_json_import_service.py

Tests for the JSON import surface: parse errors, unrecognised shapes,
missing-domain warnings and upload validation.
"""

from __future__ import annotations

import json
import unittest

from app.services.json_import_service import (
    NO_DOMAIN_WARNING,
    UNRECOGNIZED_SHAPE_MESSAGE,
    ImportSummary,
    JsonImportError,
    JsonImportService,
)


def _service(max_upload_bytes: int = 1024 * 1024, preview_count: int = 5) -> JsonImportService:
    return JsonImportService(max_upload_bytes=max_upload_bytes, preview_count=preview_count)


class ImportTextTests(unittest.TestCase):
    def test_blank_text_clears_import(self) -> None:
        summary = _service().import_text("   \n")
        self.assertTrue(summary.is_empty)
        self.assertIsNone(summary.user_context)
        self.assertEqual(summary.warnings, [])

    def test_invalid_json_is_reported(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_text("[{broken")
        self.assertTrue(str(ctx.exception).startswith("Invalid JSON: "))

    def test_too_deeply_nested_json_is_reported(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_text("[" * 100000 + "]" * 100000)
        self.assertTrue(str(ctx.exception).startswith("Invalid JSON: "))

    def test_oversized_integer_literal_is_reported(self) -> None:
        text = '[{"domainURL": "a.com", "n": ' + "1" * 5000 + "}]"
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_text(text)
        self.assertTrue(str(ctx.exception).startswith("Invalid JSON: "))

    def test_unrecognised_shape_is_reported(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_text('{"company": "Acme"}')
        self.assertEqual(str(ctx.exception), UNRECOGNIZED_SHAPE_MESSAGE)

    def test_empty_array_is_reported_as_unrecognised(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_text("[]")
        self.assertEqual(str(ctx.exception), UNRECOGNIZED_SHAPE_MESSAGE)

    def test_records_without_domains_are_kept_with_warning(self) -> None:
        summary = _service().import_text('[{"company": "Acme"}, {"company": "Beta"}]')
        self.assertEqual(summary.entry_count, 2)
        self.assertEqual(summary.warnings, [NO_DOMAIN_WARNING])
        self.assertEqual(summary.unique_domains, [])

    def test_valid_array_summary(self) -> None:
        text = json.dumps(
            [
                {"domainURL": "a.com"},
                {"domain": "b.com"},
                {"domainURL": "a.com"},
            ]
        )
        summary = _service().import_text(text)
        self.assertEqual(summary.entry_count, 3)
        self.assertEqual(summary.unique_domains, ["a.com", "b.com"])
        self.assertEqual(summary.warnings, [])

    def test_webshop_user_context_is_carried(self) -> None:
        text = json.dumps(
            {
                "data": {"WEBSHOP": {"overview": {"domainUrl": "shop.example"}}},
                "user_context": {"currency": "EUR"},
            }
        )
        summary = _service().import_text(text)
        self.assertEqual(summary.user_context, {"currency": "EUR"})


class ImportSummaryTests(unittest.TestCase):
    def test_domain_preview_and_hidden_count(self) -> None:
        records = [{"domainURL": f"d{i}.com"} for i in range(8)]
        summary = ImportSummary(records=records, preview_count=5)
        self.assertEqual(summary.domain_preview, ["d0.com", "d1.com", "d2.com", "d3.com", "d4.com"])
        self.assertEqual(summary.hidden_domain_count, 3)

    def test_no_hidden_domains_when_under_preview(self) -> None:
        summary = ImportSummary(records=[{"domainURL": "a.com"}])
        self.assertEqual(summary.hidden_domain_count, 0)


class ImportBytesTests(unittest.TestCase):
    def test_rejects_other_extensions(self) -> None:
        with self.assertRaises(JsonImportError):
            _service().import_bytes(b"[]", filename="data.csv")

    def test_accepts_txt_with_bom(self) -> None:
        data = "\ufeff[{\"domain\": \"a.com\"}]".encode("utf-8")
        summary = _service().import_bytes(data, filename="export.TXT")
        self.assertEqual(summary.unique_domains, ["a.com"])

    def test_rejects_oversized_upload(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service(max_upload_bytes=10).import_bytes(b'[{"domain": "a.com"}]', filename="a.json")
        self.assertIn("too large", str(ctx.exception))

    def test_rejects_non_utf8(self) -> None:
        with self.assertRaises(JsonImportError):
            _service().import_bytes(b"\xff\xfe\x00[", filename="a.json")

    def test_rejects_empty_file(self) -> None:
        with self.assertRaises(JsonImportError) as ctx:
            _service().import_bytes(b"  ", filename="a.json")
        self.assertEqual(str(ctx.exception), "Uploaded file is empty.")


if __name__ == "__main__":
    unittest.main()
