"""HomeworkHelper - step-by-step answers to homework questions.

Combines FastAPI for the relay endpoint, httpx for upstream and page-to-API
calls, NiceGUI for the page, and Pydantic for configuration and validation.

Components:
    - api: HTTP endpoints and error rendering
    - relay: DeepSeek configuration, solver service, error taxonomy
    - ui: Homework page, answer state, screenshot tray
    - models: Request/response and upstream wire schemas
"""

__version__ = "0.1.0"
