"""PostgreSQL access: pool lifecycle and the query capability protocol."""

from .database import Database
from .ports import DatabaseAdapter, IDatabaseAdapter

__all__ = ["Database", "DatabaseAdapter", "IDatabaseAdapter"]
