"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Routes live in ``api/v1/endpoints`` and only adapt HTTP
requests; the request handlers in ``controllers`` decide status codes
and bodies, and ``services`` performs the actual data operations.
"""

from .main import app  # noqa: F401
