"""erdkit - ABI-driven argument codec and transaction builders for smart contracts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("erdkit")
except PackageNotFoundError:
    __version__ = "(local)"
