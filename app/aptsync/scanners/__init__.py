"""Inventory scanners for different package managers.

This module exports the scanner classes for querying installed packages.
"""

from aptsync.scanners.apt import AptScanner
from aptsync.scanners.base import ProbeError, Scanner

__all__ = ["AptScanner", "ProbeError", "Scanner"]
