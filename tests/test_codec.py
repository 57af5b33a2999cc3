import json
import logging

import pytest
from prometheus_client import REGISTRY
from pydantic import ValidationError

from qrisutil.config import CodecConfig, LoggingConfig, Settings
from qrisutil.logging_conf import JsonFormatter, configure_logging
from qrisutil.services.codec import QrisCodec
from qrisutil.services.errors import ServiceError


def test_codec_round_trip(static_base):
    codec = QrisCodec()
    encoded = codec.generate(static_base, 15000, "INV-004", "Shopping")
    assert codec.validate(encoded.payload)
    result = codec.extract(encoded.payload)
    assert result.valid is True
    assert result.fields["Additional Data"]["Invoice Number"] == "INV-004"


def test_codec_extract_reports_bad_checksum(flat_base):
    result = QrisCodec().extract(flat_base)
    assert result.valid is False
    assert result.fields["Merchant Name"] == "TOKO ABC"


def test_codec_label_overrides():
    codec = QrisCodec(CodecConfig(tag_labels={"99": "Private"}, subtag_labels={"05": "Reference Label"}))
    result = codec.extract("9902AB62070503123")
    assert result.fields == {"Private": "AB", "Additional Data": {"Reference Label": "123"}}


def test_codec_strict_parsing_rejects_malformed():
    codec = QrisCodec(CodecConfig(strict_parsing=True))
    with pytest.raises(ServiceError) as excinfo:
        codec.extract("0002010105AB")
    assert excinfo.value.code == "ERR_MALFORMED_TLV"


def test_codec_propagates_invalid_format():
    with pytest.raises(ServiceError) as excinfo:
        QrisCodec().generate("000201", 10)
    assert excinfo.value.code == "ERR_INVALID_FORMAT"
    assert excinfo.value.status_code == 422


def test_container_tags_must_be_two_characters():
    with pytest.raises(ValidationError):
        CodecConfig(container_tags=["620"])


def test_settings_nested_env(monkeypatch):
    monkeypatch.setenv("CODEC__STRICT_PARSING", "true")
    monkeypatch.setenv("LOGGING__LEVEL", "DEBUG")
    loaded = Settings()
    assert loaded.codec.strict_parsing is True
    assert loaded.logging.level == "DEBUG"


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("qrisutil.test", logging.WARNING, __file__, 1, "crc %s", ("mismatch",), None)
    record.code = "ERR_INVALID_FORMAT"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "crc mismatch"
    assert payload["level"] == "WARNING"
    assert payload["code"] == "ERR_INVALID_FORMAT"


def test_configure_logging_plain_format():
    configure_logging(LoggingConfig(level="DEBUG", json_logs=False))
    handler = logging.getLogger().handlers[0]
    assert not isinstance(handler.formatter, JsonFormatter)
    configure_logging(LoggingConfig(json_logs=True))
    assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)


def _operation_count(operation, outcome):
    value = REGISTRY.get_sample_value("qrisutil_operations_total", {"operation": operation, "outcome": outcome})
    return value or 0.0


def test_extract_counts_only_extract_operations(static_base):
    codec = QrisCodec()
    payload = codec.generate(static_base, 1000).payload
    validate_before = _operation_count("validate", "valid")
    extract_before = _operation_count("extract", "ok")
    codec.extract(payload)
    assert _operation_count("validate", "valid") == validate_before
    assert _operation_count("extract", "ok") == extract_before + 1


def test_json_formatter_omits_standard_record_attributes():
    record = logging.LogRecord("qrisutil.test", logging.INFO, __file__, 42, "hello", (), None)
    payload = json.loads(JsonFormatter().format(record))
    assert set(payload) == {"level", "logger", "message"}
