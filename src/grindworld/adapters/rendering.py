"""Boundary for visual feedback on resource nodes."""

from typing import Any, Protocol


class NodeRenderer(Protocol):
    """Fire-and-forget visual effects; never consulted for game state."""

    def flash_damage(self, visual: Any) -> None:
        """Briefly highlight a damaged node."""

    def destruction_burst(self, visual: Any, color: str) -> None:
        """Spawn destruction particles around a node."""

    def detach(self, visual: Any) -> None:
        """Remove a node's visual representation from the scene."""


class NullRenderer:
    """Renderer for headless sessions."""

    def flash_damage(self, visual: Any) -> None:
        return None

    def destruction_burst(self, visual: Any, color: str) -> None:
        return None

    def detach(self, visual: Any) -> None:
        return None
