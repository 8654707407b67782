"""
Tradeview: query-string driven access to candle and private trade data.

Modules:
- queries: Parameter validation, option normalization, statement dispatch
- infrastructure: Database pool, structured logging
- config: YAML + environment configuration
"""

__version__ = "0.1.0"
