"""Errors raised by plugin code."""

from __future__ import annotations

from typing import Union


class PdkError(Exception):
    """An error raised by plugin code; a bare instance carries a custom message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class HostFnError(PdkError):
    """A host function call failed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"host function error: {detail}")
        self.detail = detail


class SerialisationError(PdkError):
    """A value could not be converted to or from its wire form."""

    def __init__(self, detail: Union[str, Exception]) -> None:
        super().__init__(f"serialisation error: {detail}")
        self.detail = detail
        if isinstance(detail, BaseException):
            self.__cause__ = detail