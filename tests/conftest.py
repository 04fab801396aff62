from __future__ import annotations

import os


# Keep catalog resolution deterministic: tests use the packaged vendor catalog
# unless they pass one explicitly.
os.environ.pop("ADEXIT_VENDOR_CATALOG", None)
