from .correlation_service import AggregationPolicy, clip, correlate, overlaps
from .history_service import DEFAULT_LOCKFILE, HistoryService
from .region_service import DEFAULT_MARKER, extract_regions
from .report_service import FORMATS, ReportService
from .time_format import format_absolute, format_relative


__all__ = [
    'AggregationPolicy',
    'DEFAULT_LOCKFILE',
    'DEFAULT_MARKER',
    'FORMATS',
    'HistoryService',
    'ReportService',
    'clip',
    'correlate',
    'extract_regions',
    'format_absolute',
    'format_relative',
    'overlaps',
]
