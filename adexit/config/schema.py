"""Dataclasses and validation for exit configs.

An exit config describes where a clickable ad surface may navigate: named
targets with a final URL, optional tracking URLs, substitution variables (some
sourced from analytics vendors) and references to named click filters.
``validate_config`` turns an untyped decoded document into an ``ExitConfig`` or
raises the first ``ConfigError`` it finds, checking filters, then transport,
then targets.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
import copy
from dataclasses import dataclass, field
import re
from typing import Any

from adexit.config.errors import (
    InvalidTransportValueError,
    InvalidVariableNameError,
    MalformedFilterError,
    MalformedTargetError,
    MalformedVariableError,
    MissingFinalUrlError,
    MissingVendorResponseKeyError,
    NotAnObjectError,
    UndefinedFilterReferenceError,
    UnknownTransportModeError,
    UnknownVendorError,
    UnsupportedFilterTypeError,
)
from adexit.config.vendors import VendorCatalog, default_vendor_catalog
from adexit.core.logging import get_logger


TRANSPORT_BEACON = "beacon"
TRANSPORT_IMAGE = "image"
VALID_TRANSPORT_MODES = {TRANSPORT_BEACON, TRANSPORT_IMAGE}

FILTER_TYPE_CLICK_DELAY = "CLICK_DELAY"
FILTER_TYPE_CLICK_LOCATION = "CLICK_LOCATION"
VALID_FILTER_TYPES = {FILTER_TYPE_CLICK_DELAY, FILTER_TYPE_CLICK_LOCATION}

VARIABLE_NAME_PATTERN = re.compile(r"^_[A-Za-z0-9_-]+$")

_LOGGER = get_logger("adexit.config")


def _merge_source(source: Mapping[str, Any], modelled: dict[str, Any]) -> dict[str, Any]:
    # Authored keys (including unmodelled ones and explicit nulls) pass through.
    payload = copy.deepcopy(dict(source))
    payload.update(modelled)
    return payload


@dataclass(slots=True, frozen=True)
class ClickDelayFilter:
    name: str
    delay: Any = None
    source: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def type(self) -> str:
        return FILTER_TYPE_CLICK_DELAY

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.delay is not None:
            payload["delay"] = self.delay
        return _merge_source(self.source, payload)


@dataclass(slots=True, frozen=True)
class ClickLocationFilter:
    name: str
    top: Any = None
    right: Any = None
    bottom: Any = None
    left: Any = None
    relative_to: Any = None
    source: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def type(self) -> str:
        return FILTER_TYPE_CLICK_LOCATION

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        for key, value in (
            ("top", self.top),
            ("right", self.right),
            ("bottom", self.bottom),
            ("left", self.left),
            ("relativeTo", self.relative_to),
        ):
            if value is not None:
                payload[key] = value
        return _merge_source(self.source, payload)


FilterConfig = ClickDelayFilter | ClickLocationFilter


@dataclass(slots=True, frozen=True)
class VariableSpec:
    name: str
    default_value: Any = None
    vendor_analytics_source: str | None = None
    vendor_analytics_response_key: str | None = None
    source: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.default_value is not None:
            payload["defaultValue"] = self.default_value
        if self.vendor_analytics_source is not None:
            payload["vendorAnalyticsSource"] = self.vendor_analytics_source
        if self.vendor_analytics_response_key is not None:
            payload["vendorAnalyticsResponseKey"] = self.vendor_analytics_response_key
        return _merge_source(self.source, payload)


@dataclass(slots=True, frozen=True)
class NavigationTarget:
    name: str
    final_url: str
    tracking_urls: tuple[str, ...] = ()
    variables: dict[str, VariableSpec] = field(default_factory=dict)
    filters: tuple[Any, ...] = ()
    source: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"finalUrl": self.final_url}
        if self.tracking_urls:
            payload["trackingUrls"] = list(self.tracking_urls)
        if self.variables:
            payload["vars"] = {name: spec.to_dict() for name, spec in self.variables.items()}
        if self.filters:
            payload["filters"] = list(self.filters)
        return _merge_source(self.source, payload)


@dataclass(slots=True, frozen=True)
class ExitConfig:
    """A validated exit config.

    Records keep the authored mapping they were built from in ``source``, so
    ``to_dict`` returns every authored key, including ones this package does
    not model, with ``filters`` and ``transport`` defaulted to ``{}``.
    """

    targets: dict[str, NavigationTarget]
    filters: dict[str, FilterConfig] = field(default_factory=dict)
    transport: dict[str, bool] = field(default_factory=dict)
    source: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def filters_for(self, target_name: str) -> list[FilterConfig]:
        """Resolved filters of a target, in the order the target lists them."""
        target = self.targets[target_name]
        return [self.filters[name] for name in target.filters]

    def to_dict(self) -> dict[str, Any]:
        return _merge_source(
            self.source,
            {
                "targets": {name: target.to_dict() for name, target in self.targets.items()},
                "filters": {name: spec.to_dict() for name, spec in self.filters.items()},
                "transport": dict(self.transport),
            },
        )


def normalize_config(data: Any) -> dict[str, Any]:
    """Return a copy of ``data`` with absent ``filters``/``transport`` set to ``{}``."""
    if not isinstance(data, Mapping):
        raise NotAnObjectError("exit config must be an object, got %s", type(data).__name__)
    normalized = copy.deepcopy(dict(data))
    if normalized.get("filters") is None:
        normalized["filters"] = {}
    if normalized.get("transport") is None:
        normalized["transport"] = {}
    return normalized


def validate_transport(transport: Any) -> dict[str, bool]:
    if not isinstance(transport, Mapping):
        raise NotAnObjectError("'transport' must be an object")
    for mode, enabled in transport.items():
        if mode not in VALID_TRANSPORT_MODES:
            raise UnknownTransportModeError("Unknown transport option: '%s'", mode)
        if not isinstance(enabled, bool):
            raise InvalidTransportValueError("transport option '%s' must be a boolean, got %r", mode, enabled)
    return dict(transport)


def _parse_filter(name: str, spec: Mapping[str, Any]) -> FilterConfig:
    if spec["type"] == FILTER_TYPE_CLICK_DELAY:
        return ClickDelayFilter(name=name, delay=spec.get("delay"), source=dict(spec))
    return ClickLocationFilter(
        name=name,
        top=spec.get("top"),
        right=spec.get("right"),
        bottom=spec.get("bottom"),
        left=spec.get("left"),
        relative_to=spec.get("relativeTo"),
        source=dict(spec),
    )


def validate_filters(filters: Any) -> dict[str, FilterConfig]:
    if not isinstance(filters, Mapping):
        raise NotAnObjectError("'filters' must be an object")
    parsed: dict[str, FilterConfig] = {}
    for name, spec in filters.items():
        if not isinstance(spec, Mapping):
            raise MalformedFilterError("Filter specification '%s' is malformed", name)
        filter_type = spec.get("type")
        if not isinstance(filter_type, str) or filter_type not in VALID_FILTER_TYPES:
            raise UnsupportedFilterTypeError(
                "Filter '%s' has unsupported type '%s'; only CLICK_DELAY and CLICK_LOCATION are supported",
                name,
                filter_type,
            )
        # Bounds and delay are carried as authored; range checks belong to filter execution.
        parsed[name] = _parse_filter(name, spec)
    return parsed


def _validate_variable(
    target_name: str,
    variable_name: Any,
    spec: Any,
    vendors: VendorCatalog,
) -> VariableSpec:
    if not isinstance(variable_name, str) or not VARIABLE_NAME_PATTERN.fullmatch(variable_name):
        raise InvalidVariableNameError(
            "'%s' must match the pattern '%s'",
            variable_name,
            VARIABLE_NAME_PATTERN.pattern,
        )
    if not isinstance(spec, Mapping):
        raise MalformedVariableError(
            "variable '%s' of target '%s' must be an object",
            variable_name,
            target_name,
        )
    vendor = spec.get("vendorAnalyticsSource")
    response_key = spec.get("vendorAnalyticsResponseKey")
    if vendor:
        if not isinstance(vendor, str) or not vendors.supports_iframe_transport(vendor):
            raise UnknownVendorError("Unknown vendor: %s", vendor)
        if not response_key:
            raise MissingVendorResponseKeyError(
                "Variable '%s': If vendorAnalyticsSource is defined then "
                "vendorAnalyticsResponseKey must also be defined",
                variable_name,
            )
    return VariableSpec(
        name=variable_name,
        default_value=spec.get("defaultValue"),
        vendor_analytics_source=vendor,
        vendor_analytics_response_key=response_key,
        source=dict(spec),
    )


def _vendor_catalog(vendors: Mapping[str, Any] | None) -> VendorCatalog:
    if vendors is None:
        return default_vendor_catalog()
    if isinstance(vendors, VendorCatalog):
        return vendors
    return VendorCatalog(vendors)


def validate_target(
    name: str,
    target: Any,
    filters: Mapping[str, FilterConfig],
    vendors: Mapping[str, Any] | None = None,
) -> NavigationTarget:
    catalog = _vendor_catalog(vendors)
    if not isinstance(target, Mapping) or not isinstance(target.get("finalUrl"), str):
        raise MissingFinalUrlError("finalUrl of target '%s' must be a string", name)

    filter_refs = target.get("filters") or []
    if not isinstance(filter_refs, list):
        raise MalformedTargetError("filters of target '%s' must be a list of filter names", name)
    for filter_name in filter_refs:
        if not isinstance(filter_name, Hashable) or filter_name not in filters:
            raise UndefinedFilterReferenceError(
                "filter '%s' referenced by target '%s' is not defined",
                filter_name,
                name,
            )

    variables_raw = target.get("vars") or {}
    if not isinstance(variables_raw, Mapping):
        raise MalformedVariableError("vars of target '%s' must be an object", name)
    variables = {
        variable_name: _validate_variable(name, variable_name, spec, catalog)
        for variable_name, spec in variables_raw.items()
    }

    tracking_raw = target.get("trackingUrls") or []
    if not isinstance(tracking_raw, list) or any(not isinstance(url, str) for url in tracking_raw):
        raise MalformedTargetError("trackingUrls of target '%s' must be a list of strings", name)

    return NavigationTarget(
        name=name,
        final_url=target["finalUrl"],
        tracking_urls=tuple(tracking_raw),
        variables=variables,
        filters=tuple(filter_refs),
        source=dict(target),
    )


def validate_targets(
    targets: Any,
    filters: Mapping[str, FilterConfig],
    vendors: Mapping[str, Any] | None = None,
) -> dict[str, NavigationTarget]:
    if not isinstance(targets, Mapping):
        raise NotAnObjectError("'targets' must be an object")
    catalog = _vendor_catalog(vendors)
    return {name: validate_target(name, target, filters, catalog) for name, target in targets.items()}


def validate_config(data: Any, vendors: Mapping[str, Any] | None = None) -> ExitConfig:
    normalized = normalize_config(data)
    catalog = _vendor_catalog(vendors)

    filters = validate_filters(normalized["filters"])
    transport = validate_transport(normalized["transport"])
    targets = validate_targets(normalized.get("targets"), filters, catalog)

    config = ExitConfig(targets=targets, filters=filters, transport=transport, source=normalized)
    _LOGGER.debug(
        "exit config accepted",
        extra={
            "event_action": "config_validated",
            "event_outcome": "success",
            "payload": {
                "targets": len(targets),
                "filters": len(filters),
                "transport": sorted(transport),
            },
        },
    )
    return config
