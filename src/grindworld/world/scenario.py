"""Session-wide narrative context that biases world generation."""

from __future__ import annotations

from dataclasses import dataclass

from grindworld.models import ScenarioTheme


@dataclass(frozen=True, slots=True)
class Scenario:
    prompt: str = ""
    theme: ScenarioTheme = ScenarioTheme.NONE

    @property
    def active(self) -> bool:
        return self.theme is not ScenarioTheme.NONE

    @classmethod
    def from_values(cls, prompt: str | None, theme: str | ScenarioTheme | None) -> Scenario:
        """Build a scenario, treating unknown or empty theme tags as no theme."""
        if isinstance(theme, ScenarioTheme):
            resolved = theme
        else:
            try:
                resolved = ScenarioTheme((theme or "none").strip().lower())
            except ValueError:
                resolved = ScenarioTheme.NONE
        return cls(prompt=(prompt or "").strip(), theme=resolved)
