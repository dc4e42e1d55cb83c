"""Interfaces layer for taskflow.

This layer contains adapters for external interactions:
- CLI: Command-line interface using Typer
- API: REST API using FastAPI

The interfaces layer is responsible for:
- Accepting user input and validating it
- Calling application services
- Formatting output for the user
"""

from taskflow.interfaces.cli import app

__all__ = ["app"]
