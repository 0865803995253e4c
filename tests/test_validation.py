from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from common.validation import (
    FileLimit,
    SchemaModel,
    ValidationError,
    enforce_limits,
    parse_model,
    validate_mime,
)


class _Payload(SchemaModel):
    name: str


def _upload(data: bytes) -> FileStorage:
    return FileStorage(stream=BytesIO(data), filename="doc.pdf")


def test_file_limit_from_settings_falls_back_on_bad_values():
    limit = FileLimit.from_settings({"max_files": "x", "max_mb": "2"}, default_max_files=1, default_max_mb=5)
    assert limit.max_files == 1
    assert limit.max_size == 2 * 1024 * 1024
    assert FileLimit.from_settings(None, default_max_files=1, default_max_mb=500).max_size == 500 * 1024 * 1024


def test_enforce_limits_rejects_oversized_files():
    with pytest.raises(ValidationError, match="exceeds"):
        enforce_limits([_upload(b"x" * 20)], FileLimit(max_files=1, max_size=10))
    with pytest.raises(ValidationError, match="Too many"):
        enforce_limits([_upload(b"a"), _upload(b"b")], FileLimit(max_files=1, max_size=10))


def test_validate_mime_checks_pdf_signature():
    good = _upload(b"%PDF-1.7 rest")
    validate_mime([good], {"application/pdf"})
    assert good.stream.tell() == 0
    with pytest.raises(ValidationError, match="signature"):
        validate_mime([_upload(b"PK\x03\x04")], {"application/pdf"})


def test_parse_model_strips_and_forbids_extra_fields():
    assert parse_model(_Payload, {"name": "  x "}).name == "x"
    with pytest.raises(ValidationError) as excinfo:
        parse_model(_Payload, {"name": "x", "other": 1})
    assert excinfo.value.details


def test_file_limit_from_settings_ignores_infinite_values():
    limit = FileLimit.from_settings(
        {"max_files": float("inf"), "max_mb": float("inf")}, default_max_files=1, default_max_mb=5
    )
    assert limit.max_files == 1
    assert limit.max_size == 5 * 1024 * 1024
