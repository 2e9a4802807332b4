"""
Tool handlers organized by domain.
"""

from .elements import ELEMENT_HANDLERS
from .page import PAGE_HANDLERS

ALL_HANDLERS = {**ELEMENT_HANDLERS, **PAGE_HANDLERS}

__all__ = ["ALL_HANDLERS", "ELEMENT_HANDLERS", "PAGE_HANDLERS"]
