"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class DesignCloneError(Exception):
    """Base exception for DesignClone."""


class ValidationError(DesignCloneError):
    """Input validation failed."""


class DocumentReadError(DesignCloneError):
    """Design document could not be read or decoded."""


class NodeFormatError(ValidationError):
    """Node tree payload does not match the node format."""

    __slots__ = ("path",)

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path
