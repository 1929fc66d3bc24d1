"""External collaborator boundaries (inventory, rendering, content service)."""

from .content_service import ContentService, OpenAIContentService, TileRequest
from .inventory import InMemoryInventory, InventorySink
from .rendering import NodeRenderer, NullRenderer

__all__ = [
    "ContentService",
    "InMemoryInventory",
    "InventorySink",
    "NodeRenderer",
    "NullRenderer",
    "OpenAIContentService",
    "TileRequest",
]
