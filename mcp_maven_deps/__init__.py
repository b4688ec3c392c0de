"""Top-level package for mcp-maven-deps.

Exports the centralized logging configuration.
"""

from .logging_config import configure_logging  # re-export for convenience

__version__ = "0.2.0"

__all__ = ["configure_logging", "__version__"]
