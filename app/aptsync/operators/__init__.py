"""Package operators for executing installations.

This module provides the abstract operator interface and the APT backend.
"""

from aptsync.operators.apt import AptOperator
from aptsync.operators.base import Operator

__all__ = ["AptOperator", "Operator"]
