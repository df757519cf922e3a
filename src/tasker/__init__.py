"""tasker: a local command-line task tracker."""

from tasker.config import VERSION

__version__ = VERSION
