"""
Database - Motor/Beanie connection manager and base document.
"""

from common.database.mongodb import MongoDB
from common.database.base_document import BaseDocument

__all__ = ["MongoDB", "BaseDocument"]
