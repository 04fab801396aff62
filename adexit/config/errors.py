"""Errors raised while validating exit configs."""

from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    """Base error for rejected exit configs.

    The message is a ``%``-style template plus positional parameters so callers
    can render it themselves or inspect the offending names.
    """

    kind = "ConfigError"

    def __init__(self, template: str, *params: Any) -> None:
        self.template = template
        self.params = params
        super().__init__(template % params if params else template)


class NotAnObjectError(ConfigError):
    """A value that must be an object is missing or has another type."""

    kind = "NotAnObject"


class UnknownTransportModeError(ConfigError):
    """Transport section names a mode other than beacon or image."""

    kind = "UnknownTransportMode"


class InvalidTransportValueError(ConfigError):
    """Transport toggle is not a boolean."""

    kind = "InvalidTransportValue"


class MalformedFilterError(ConfigError):
    """Filter specification is not an object."""

    kind = "MalformedFilter"


class UnsupportedFilterTypeError(ConfigError):
    """Filter type is neither CLICK_DELAY nor CLICK_LOCATION."""

    kind = "UnsupportedFilterType"


class MissingFinalUrlError(ConfigError):
    """Target has no string finalUrl."""

    kind = "MissingFinalUrl"


class UndefinedFilterReferenceError(ConfigError):
    """Target references a filter missing from the filter catalog."""

    kind = "UndefinedFilterReference"


class InvalidVariableNameError(ConfigError):
    kind = "InvalidVariableName"


class UnknownVendorError(ConfigError):
    """Vendor is not in the catalog or has no iframe transport."""

    kind = "UnknownVendor"


class MissingVendorResponseKeyError(ConfigError):
    kind = "MissingVendorResponseKey"


class MalformedTargetError(ConfigError):
    """Target trackingUrls or filters list has the wrong shape."""

    kind = "MalformedTarget"


class MalformedVariableError(ConfigError):
    kind = "MalformedVariable"


class ConfigParseError(ConfigError):
    """Config document could not be decoded."""

    kind = "ConfigParse"


__all__ = [
    "ConfigError",
    "ConfigParseError",
    "InvalidTransportValueError",
    "InvalidVariableNameError",
    "MalformedFilterError",
    "MalformedTargetError",
    "MalformedVariableError",
    "MissingFinalUrlError",
    "MissingVendorResponseKeyError",
    "NotAnObjectError",
    "UndefinedFilterReferenceError",
    "UnknownTransportModeError",
    "UnknownVendorError",
    "UnsupportedFilterTypeError",
]
