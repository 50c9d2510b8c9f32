"""
This __init__.py file is kept in the root tests directory while other __init__.py files
in the test structure are omitted for simplicity.

Reasons for keeping this file:
1. It ensures pytest recognizes the entire tests/ directory as a package
2. It lets test modules import shared helpers as `tests.helpers.<module>`

Since Python 3.3+, other directories can function as namespace packages without
requiring __init__.py files (PEP 420).
"""
