"""Integration tests for components working together as a system.

Coverage:
    - POST /api/solve through routing, validation, and error rendering
    - Page controller talking to the real app over ASGI
    - Live DeepSeek call (when DEEPSEEK_API_KEY is configured)
"""
