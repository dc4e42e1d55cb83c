"""HTTP interface for taskflow using FastAPI.

Serve the app returned by create_app() with any ASGI server.

The notification sink lives on ``app.state.sink`` and is shared by every
request, so queued notifications and their expiry timers survive between
calls.
"""

from taskflow.interfaces.api.routes import create_app, router

__all__ = ["create_app", "router"]
