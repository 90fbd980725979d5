"""FastAPI endpoints for HomeworkHelper.

Thin HTTP layer over the relay: parses requests, renders relay errors as
``{error, details}`` JSON, and exposes health status.

Endpoints:
    - GET /health: Service health status
    - POST /api/solve: Relay a homework question to DeepSeek
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
