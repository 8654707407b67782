"""
Observability for tradeview: structured, context-bound logging shared by the
query layer, the database adapter and the HTTP service.
"""

from .logging import (
    get_api_logger,
    get_database_logger,
    get_infrastructure_logger,
    get_logger,
    get_query_logger,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_query_logger",
    "get_api_logger",
    # Aliases
    "get_database_logger",
]
