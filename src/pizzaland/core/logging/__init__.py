# core/logging/
# ├─ __init__.py      # public API
# ├─ adapters.py      # OperationLogger: key-value context such as op=...
# ├─ builder.py       # make_dict_config(settings) + setup_logging(settings)
# ├─ filters.py       # RequestIdFilter (+ contextvar helpers), RedactFilter
# ├─ formatters.py    # JsonFormatter, ColorFormatter
# ├─ handlers.py      # handler factories (console / rotating files)
# └─ middleware.py    # RequestIDMiddleware

from .adapters import OperationLogger, get_operation_logger
from .builder import make_dict_config, setup_logging
from .filters import RequestIdFilter, get_request_id, set_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    "OperationLogger",
    "get_operation_logger",
    "make_dict_config",
    "setup_logging",
    "RequestIdFilter",
    "get_request_id",
    "set_request_id",
    "RequestIDMiddleware",
]
