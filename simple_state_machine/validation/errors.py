"""Error accumulation for validated subjects."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import ValidationError

BASE_ATTRIBUTE = "base"


class ErrorCollection:
    """Ordered (attribute, message) pairs attached to one subject."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, str]] = []

    def add(self, attribute: str | None, message: str) -> None:
        self._entries.append((attribute or BASE_ATTRIBUTE, str(message)))

    def extend(self, entries) -> None:
        for attribute, message in entries:
            self.add(attribute, message)

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def is_empty(self) -> bool:
        return not self._entries

    def on(self, attribute: str) -> list[str]:
        return [message for name, message in self._entries if name == attribute]

    def full_messages(self) -> list[str]:
        messages = []
        for attribute, message in self._entries:
            if attribute == BASE_ATTRIBUTE:
                messages.append(message)
            else:
                messages.append(f"{attribute} {message}")
        return messages

    def to_dict(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for attribute, message in self._entries:
            grouped.setdefault(attribute, []).append(message)
        return grouped

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ErrorCollection({self._entries!r})"


def errors_from_pydantic(exc: ValidationError) -> list[tuple[str, str]]:
    """Translate a pydantic ValidationError into (attribute, message) pairs."""
    entries = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or BASE_ATTRIBUTE
        entries.append((location, error.get("msg", "is invalid")))
    return entries
