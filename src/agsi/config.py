"""Package-wide constants."""

from importlib.metadata import PackageNotFoundError, version

# Schema revision this library reads and writes.
AGSI_VERSION = "1.0.1"

PRODUCER_NAME = "agsi-python"

try:
    PACKAGE_VERSION = version("agsi")
except PackageNotFoundError:
    PACKAGE_VERSION = "0.0.0"
