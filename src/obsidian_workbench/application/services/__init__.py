"""Application services."""

from .workbench_service import WorkbenchService

__all__ = ["WorkbenchService"]
