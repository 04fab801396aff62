"""Read-only analytics vendor catalog."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import copy
from functools import lru_cache
import os
from pathlib import Path
from typing import Any

from adexit.config.documents import read_document
from adexit.config.errors import NotAnObjectError


DEFAULT_VENDOR_CATALOG_PATH = Path(__file__).with_name("vendors.yml")
VENDOR_CATALOG_ENV = "ADEXIT_VENDOR_CATALOG"


class VendorCatalog(Mapping[str, Mapping[str, Any]]):
    """Vendor name to descriptor lookup.

    Descriptors are deep-copied on construction so the catalog can be shared
    between validations without callers mutating it underneath them.
    """

    def __init__(self, vendors: Mapping[str, Any] | None = None) -> None:
        raw = vendors or {}
        if not isinstance(raw, Mapping):
            raise NotAnObjectError("vendor catalog must be an object")
        self._vendors: dict[str, dict[str, Any]] = {}
        for name, descriptor in raw.items():
            if not isinstance(descriptor, Mapping):
                raise NotAnObjectError("vendor '%s' descriptor must be an object", name)
            self._vendors[str(name)] = copy.deepcopy(dict(descriptor))

    def __getitem__(self, name: str) -> Mapping[str, Any]:
        return self._vendors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vendors)

    def __len__(self) -> int:
        return len(self._vendors)

    def supports_iframe_transport(self, name: str) -> bool:
        # Only key presence matters; the iframe URL itself is not inspected.
        descriptor = self._vendors.get(name)
        if descriptor is None:
            return False
        transport = descriptor.get("transport")
        return isinstance(transport, Mapping) and "iframe" in transport

    def summary(self) -> list[dict[str, Any]]:
        return [
            {"name": name, "iframe_transport": self.supports_iframe_transport(name)}
            for name in sorted(self._vendors)
        ]


def load_vendor_catalog(path: Path) -> VendorCatalog:
    raw = read_document(path, label="vendor catalog") or {}
    # Catalog files may either be the bare mapping or nest it under "vendors".
    if isinstance(raw, Mapping) and isinstance(raw.get("vendors"), Mapping):
        raw = raw["vendors"]
    return VendorCatalog(raw)


@lru_cache(maxsize=1)
def default_vendor_catalog() -> VendorCatalog:
    return load_vendor_catalog(DEFAULT_VENDOR_CATALOG_PATH)


def resolve_vendor_catalog(path: Path | None = None) -> VendorCatalog:
    """Catalog from an explicit path, then ``ADEXIT_VENDOR_CATALOG``, then the packaged default."""
    if path is not None:
        return load_vendor_catalog(path)
    env_path = os.environ.get(VENDOR_CATALOG_ENV, "").strip()
    if env_path:
        return load_vendor_catalog(Path(env_path))
    return default_vendor_catalog()
