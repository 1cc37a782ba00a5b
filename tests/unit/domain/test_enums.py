import pytest

from message_processor.core.exceptions import InvalidEnumValueError
from message_processor.domain.entities import DeviceType, LicensingType


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Standard", LicensingType.STANDARD),
        ("premium", LicensingType.PREMIUM),
        ("ENTERPRISE", LicensingType.ENTERPRISE),
        (" Premium ", LicensingType.PREMIUM),
    ],
)
def test_licensing_parses_member_names_case_insensitively(text, expected):
    assert LicensingType.parse(text) is expected


@pytest.mark.parametrize("text", ["Gold", "", "2", None, 2])
def test_licensing_rejects_anything_else(text):
    with pytest.raises(InvalidEnumValueError):
        LicensingType.parse(text)


def test_device_type_values_match_storage_codes():
    assert DeviceType.parse("custom") == 2
    assert DeviceType.parse("Standard") == 1
    assert [m.value for m in LicensingType] == [1, 2, 3]


def test_device_type_rejects_licensing_names():
    with pytest.raises(InvalidEnumValueError):
        DeviceType.parse("Premium")
