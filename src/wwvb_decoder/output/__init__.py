"""Output adapters - terminal report and JSON result file."""

from .report import format_frame_dump, format_report
from .result_writer import ResultWriter

__all__ = ['format_frame_dump', 'format_report', 'ResultWriter']
