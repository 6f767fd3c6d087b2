"""
Outline Adapters - Property stores for outline documents.
"""

from .org import OrgDocument, OrgHeading

__all__ = ["OrgDocument", "OrgHeading"]
