"""
Defines errors which can be produced by parsers.

Errors travel inside :py:class:`Result <argbind.result.Result>` objects rather
than being raised. The exception is :py:class:`DeclarationError`, which is
raised when a parser is declared in a way that could never be satisfied.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ArgumentError(Exception):
    usage: str

    def __str__(self) -> str:
        return self.usage

    @property
    def kind(self) -> str:
        """
        >>> UnrecognizedTokenError(usage="Unrecognized token: -x", unexpected="-x").kind
        'UnrecognizedTokenError'
        """
        return type(self).__name__


@dataclass
class ZeroError(ArgumentError):
    pass


@dataclass
class UnrecognizedTokenError(ArgumentError):
    unexpected: str


@dataclass
class MissingValueError(ArgumentError):
    option: str


@dataclass
class ConversionError(ArgumentError):
    text: str
    expected: str


@dataclass
class ApplicationError(ArgumentError):
    value: Any
    exception: Optional[Exception] = None


@dataclass
class CardinalityError(ArgumentError):
    name: str
    minimum: int
    maximum: int
    observed: int


@dataclass
class DeclarationError(ArgumentError):
    pass
