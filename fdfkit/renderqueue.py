"""The ordered list of image instances to draw each frame."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fdfkit.images import Image, Instance


@dataclass(eq=False)
class DrawCall:
    """A request to draw one instance of an image."""

    image: Image
    instance_id: int

    def instance(self) -> Instance:
        """Return the instance this call draws."""
        return self.image.instances[self.instance_id]


class RenderQueue:
    """Draw calls kept in drawing order."""

    def __init__(self) -> None:
        self._calls: list[DrawCall] = []

    def push_front(self, call: DrawCall) -> None:
        """Put a draw call at the head of the queue."""
        self._calls.insert(0, call)

    def remove_image(self, image: Image) -> list[DrawCall]:
        """Remove every draw call for ``image`` and return them."""
        removed = [call for call in self._calls if call.image is image]
        self._calls = [call for call in self._calls if call.image is not image]
        return removed

    def sort(self) -> None:
        """Order calls by ascending depth.

        Calls with equal depth end up in the reverse of their previous order.
        """
        self._calls = sorted(reversed(self._calls), key=lambda call: call.instance().z)

    def __iter__(self) -> Iterator[DrawCall]:
        return iter(list(self._calls))

    def __len__(self) -> int:
        return len(self._calls)