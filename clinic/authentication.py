"""
Custom authentication backend for token-based auth.

This module defines a subclass of Django REST framework's
``TokenAuthentication`` that pins the ``keyword`` used in the
``Authorization`` header.  Keeping it apart from the login views avoids
circular imports when the REST framework loads authentication classes
during initialization.  ``Bearer`` headers are left to simplejwt.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Legacy DRF token authentication using the ``Token`` keyword."""

    keyword = 'Token'
