from qrisutil import extract, generate, validate
from qrisutil.labels import TagLabels
from qrisutil.qris_decoder import extract_payload, validate_payload


def test_extract_generated_payload(static_base):
    result = extract(generate(static_base, 15000, "INV-004", "Shopping"))
    assert result["Transaction Amount"] == "15000.00"
    assert result["Payload Format Indicator"] == "01"
    assert result["Additional Data"] == {"Invoice Number": "INV-004", "Description": "Shopping"}


def test_extract_drops_crc(flat_base):
    result = extract(generate(flat_base, 1))
    assert "CRC" not in result
    assert result["Merchant Name"] == "TOKO ABC"
    assert result["Merchant City"] == "JAKARTA"


def test_extract_unknown_tags():
    result = extract("9902AB62090005ABCDE")
    assert result == {"Tag 99": "AB", "Additional Data": {"Global Unique ID": "ABCDE"}}
    assert extract("62060502XY") == {"Additional Data": {"Tag 05": "XY"}}


def test_extract_garbage_yields_partial_result():
    assert extract("not a payload") == {}
    assert extract("") == {}
    assert extract("000201XX") == {"Payload Format Indicator": "01"}


def test_extract_with_custom_labels():
    labels = TagLabels(root={"00": "Version"}, nested={})
    result = extract_payload("000201620705031236304ABCD", labels=labels)
    assert result == {"Version": "01", "Tag 62": {"Tag 05": "123"}}


def test_extract_with_custom_container_tags():
    result = extract_payload("26080004TEST62070503123", container_tags={"26"})
    assert result["Merchant Account Info (26)"] == {"Global Unique ID": "TEST"}
    assert result["Additional Data"] == "0503123"


def test_validate_rejects_missing_marker():
    assert validate("000201") is False


def test_validate_rejects_short_checksum():
    assert validate("0002016304AB") is False


def test_validate_detects_checksum_tampering(static_base):
    payload = generate(static_base, 7000, "INV-003", "Mobile Data")
    for pos in range(1, 5):
        original = payload[-pos]
        replacement = "0" if original != "0" else "1"
        tampered = payload[: len(payload) - pos] + replacement + payload[len(payload) - pos + 1 :]
        assert validate(tampered) is False


def test_validate_is_case_sensitive(flat_base):
    payload = generate(flat_base, 1)
    assert validate(payload[:-4] + payload[-4:].lower()) is (payload[-4:] == payload[-4:].lower())


def test_validate_with_unencodable_payload_returns_false():
    assert validate_payload("59011€6304FFFF", encoding="latin-1") is False
