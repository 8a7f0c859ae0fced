"""Service layer exposing league files as JSON contracts."""

from .contracts import build_contract
from .services import MatchService, ServiceError, Settings

__all__ = [
    "build_contract",
    "MatchService",
    "ServiceError",
    "Settings",
]
