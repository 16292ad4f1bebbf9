"""
Application package initializer.

The service is organised the same way for every domain: pydantic
schemas in ``schemas``, business logic and persistence in
``services``, and HTTP routes in ``api/<version>/endpoints``.  Only a
single domain (products) exists today.
"""

from .main import app  # noqa: F401
