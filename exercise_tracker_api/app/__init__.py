"""
Application package initializer.

The API is organised into small pieces: ``core`` (configuration,
logging, errors and the database handle), ``schemas`` (request and
response models), ``services`` (the user directory and the exercise
log store) and ``api`` (the HTTP endpoints).
"""

from .main import app, create_app  # noqa: F401
