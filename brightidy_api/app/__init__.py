"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, persistence, errors and security helpers;
``schemas`` the request/response models; ``services`` the booking
marketplace rules; and ``api`` the HTTP routes that expose them.
"""

from .main import app  # noqa: F401
