"""
Cross-cutting infrastructure: database pool and structured logging.
"""
