from .json_safety import as_python_scalar, round_precision
from .report_errors import IngestionWarning, record_warning

__all__ = [
    "as_python_scalar",
    "round_precision",
    "IngestionWarning",
    "record_warning",
]
