"""Integer-backed enumerations stored on company and device rows."""

from enum import IntEnum

from message_processor.core.exceptions import InvalidEnumValueError


class _NamedIntEnum(IntEnum):
    """IntEnum parsed from wire text by member name, ignoring case.

    Numeric strings are rejected: "2" does not parse as ``Premium``.
    """

    @classmethod
    def parse(cls, value: object) -> "_NamedIntEnum":
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.name.lower() == key:
                    return member
        raise InvalidEnumValueError(cls.__name__, value)


class LicensingType(_NamedIntEnum):
    """Licensing tier of a company."""

    STANDARD = 1
    PREMIUM = 2
    ENTERPRISE = 3


class DeviceType(_NamedIntEnum):
    """Kind of device installed at a location."""

    STANDARD = 1
    CUSTOM = 2
