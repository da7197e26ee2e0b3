"""In-memory sink for tests and tooling."""

from __future__ import annotations

from collage.models.scene import Primitive, Scene


class RecordingSink:
    """Keeps every scene it is handed, in order."""

    def __init__(self) -> None:
        self.scenes: list[Scene] = []

    def consume(self, scene: Scene) -> None:
        self.scenes.append(scene)

    @property
    def last(self) -> Scene | None:
        return self.scenes[-1] if self.scenes else None

    @property
    def primitives(self) -> list[Primitive]:
        """Primitives of every recorded scene, concatenated."""
        return [p for scene in self.scenes for p in scene.primitives]

    def clear(self) -> None:
        self.scenes.clear()
