"""
CRM Connectors Package
Contact lookup, creation and tagging.
"""
from .base import CRMProvider, CRMContact
from .gohighlevel import GoHighLevelConnector

__all__ = [
    "CRMProvider",
    "CRMContact",
    "GoHighLevelConnector",
]
