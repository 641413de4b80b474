"""Archival pipeline."""

from .orchestrator import (
    ArchivalOrchestrator,
    LinkOutcome,
    RunStats,
    iter_documents,
    print_run_summary,
    read_document,
)

__all__ = [
    "ArchivalOrchestrator",
    "LinkOutcome",
    "RunStats",
    "iter_documents",
    "print_run_summary",
    "read_document",
]
