"""
ENA API Layer.

This package handles all communication with the ENA Portal API.
"""

from .client import ENAPortalClient

__all__ = ["ENAPortalClient"]
