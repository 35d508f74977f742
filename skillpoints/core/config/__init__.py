"""
Configuration package.

Exports the static, environment-driven `Config` and the `Environment` enum.
"""

from skillpoints.core.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]
