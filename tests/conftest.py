import pytest

# Its merchant account field is followed by a malformed header, so parsing stops after tag 26.
STATIC_BASE = (
    "00020101021126560012ID.GPNQR01189360091123456789020215ID20232541239390303UMI"
    "5204581253033605802ID5914RESTORASI MESJID6013JAKARTA SELATAN61051234563044E67"
)

# Every header in this payload is well formed, so nothing is truncated on parse.
FLAT_BASE = "0002010102115204581253033605802ID5908TOKO ABC6007JAKARTA6304ABCD"


@pytest.fixture
def static_base():
    return STATIC_BASE


@pytest.fixture
def flat_base():
    return FLAT_BASE
