"""Structured logging with time-ordered UUID log IDs, configured from YAML."""

__version__ = "0.1.3"
__all__ = ["log_id", "logger", "macros", "demo"]