"""
Version information for geodb-search package.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("geodb-search")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0+unknown"
