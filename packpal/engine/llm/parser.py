"""Line-grammar parser for generated packing lists.

Grammar (one construct per line, blank lines skipped):

    Header:        any line ending with ':'      -> opens a category
    Bullet item:   '- item' / '• item' / '* item' -> item of the open category
    Continuation:  other text without ':'         -> item of the open category

A category is only emitted if it collected at least one item.
"""

import re

from packpal.engine.models.packing import PackingCategory, PackingItem

BULLET_PREFIX = re.compile(r"^[-•*]\s*")
BULLET_MARKERS = ("-", "•", "*")


class _CategoryBuilder:
    """Accumulates parsed categories, merging repeated names."""

    def __init__(self) -> None:
        self._order: list[str] = []
        self._items: dict[str, list[PackingItem]] = {}

    def flush(self, name: str | None, items: list[PackingItem]) -> None:
        if name is None or not items:
            return
        if name not in self._items:
            self._order.append(name)
            self._items[name] = []
        self._items[name].extend(items)

    def build(self) -> list[PackingCategory]:
        return [PackingCategory(name=name, items=self._items[name]) for name in self._order]


def parse_generated_text(text: str) -> list[PackingCategory]:
    """Parse free-form generated text into packing categories.

    Args:
        text: Model output using CATEGORY:/- item lines

    Returns:
        Non-empty categories in order of first appearance (may be empty)
    """
    builder = _CategoryBuilder()
    current: str | None = None
    items: list[PackingItem] = []

    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.endswith(":"):
            builder.flush(current, items)
            name = trimmed.replace(":", "").strip()
            current = name or None
            items = []
        elif trimmed.startswith(BULLET_MARKERS):
            item_name = BULLET_PREFIX.sub("", trimmed).strip()
            if current is not None and item_name:
                items.append(PackingItem(name=item_name))
        elif current is not None and ":" not in trimmed:
            items.append(PackingItem(name=trimmed))

    builder.flush(current, items)
    return builder.build()
