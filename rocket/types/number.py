from __future__ import annotations

from typing import Union


class Number:
    """A numeric literal that remembers how it was written.

    Renders as its source text, so `007` stays `007` and `1.10` stays `1.10`.
    Compares by text against other literals and by value against plain
    Python numbers.
    """

    __slots__ = ("text", "value")

    def __init__(self, text: str):
        self.text = text
        self.value: Union[int, float] = float(text) if "." in text else int(text)

    def __eq__(self, other) -> bool:
        if isinstance(other, Number):
            return self.text == other.text
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self):
        return f"Number({self.text!r})"

    def __str__(self):
        return self.text
