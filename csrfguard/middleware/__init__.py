from .correlation import CorrelationMiddleware, get_correlation_id
from .csrf import CSRFMiddleware, GateDecision, GateOutcome, RequestGate
from .error_handler import ErrorHandlerMiddleware
from .metrics import MetricsMiddleware

__all__ = [
    "CorrelationMiddleware",
    "get_correlation_id",
    "CSRFMiddleware",
    "GateDecision",
    "GateOutcome",
    "RequestGate",
    "ErrorHandlerMiddleware",
    "MetricsMiddleware",
]
