"""Test package for Alith Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP and end-to-end session tests

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
