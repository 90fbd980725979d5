"""NiceGUI interface - thin visualization layer for the homework page.

Responsibilities:
    - Question box with submit disabled while a request is in flight
    - Answer rendering as paragraph blocks, loading and error states
    - Screenshot tray with local previews (never sent to the API)

Contains minimal business logic. Delegates solving to the API over HTTP.
"""
