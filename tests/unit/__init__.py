"""Unit tests for individual components in isolation.

Coverage:
    - relay/: Configuration and solver service
    - ui/: Page state machine, screenshot tray, page HTTP client
"""
