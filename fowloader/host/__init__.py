from fowloader.host.base import Color, ObjectHandle, ObjectHost
from fowloader.host.memory import InMemoryTable, TableObject

__all__ = [
    "Color",
    "InMemoryTable",
    "ObjectHandle",
    "ObjectHost",
    "TableObject",
]
