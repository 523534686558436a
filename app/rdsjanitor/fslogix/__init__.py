"""FSLogix profile container diagnostics.

This module exports the read-only FSLogix health checks.
"""

from rdsjanitor.fslogix.diagnostics import FSLogixDiagnostics, filter_events

__all__ = ["FSLogixDiagnostics", "filter_events"]
