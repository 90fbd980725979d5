"""Test package for HomeworkHelper.

Structure:
    - unit/: Configuration, solver, page state, attachments, page client
    - integration/: The solve endpoint through the full FastAPI stack

The upstream API is faked with httpx.MockTransport except in the live test,
which only runs when DEEPSEEK_API_KEY is set.
"""
