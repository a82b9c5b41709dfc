"""
Core package wiring the Uploadcare Gallery FastAPI application.
Importing this package ensures all route modules are loaded so route
definitions attach to the shared FastAPI application.
"""

# Import order matters: ensure app state is initialized before routes.
from . import app_state  # noqa: F401

# Route modules register themselves upon import.
from . import interfaces  # noqa: F401
from . import script_routes  # noqa: F401
from . import health_routes  # noqa: F401
