"""Reports over generation event logs."""

from .event_report import aggregate

__all__ = ["aggregate"]
