from typing import NamedTuple


class Link(NamedTuple):
    """A discovered internal link.

    Equality covers both fields, so the same href under two labels is two links.
    """
    label: str
    href: str

    def __str__(self):
        return f"{self.label} -> {self.href}"
