from .client import DeskproClient
from .errors import ApiErrorDetail, AuthError, DeskproError, ResponseFormatError, TransportError
from .results import UNDECODABLE, ApiResult

__all__ = [
    "ApiErrorDetail",
    "ApiResult",
    "AuthError",
    "DeskproClient",
    "DeskproError",
    "ResponseFormatError",
    "TransportError",
    "UNDECODABLE",
]
