"""Errors raised while loading or validating a scene."""

from __future__ import annotations


class MapError(Exception):
    """A scene description file is malformed or describes an invalid map."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message