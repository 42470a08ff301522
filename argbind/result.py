"""
Defines the ``Result`` dataclass, representing success or failure, output by
every fallible operation in the engine: conversion, binding, matching and
validation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Type, TypeVar

from pytypeclass import Monad, MonadPlus

from argbind.errors import ArgumentError, ZeroError

A_co = TypeVar("A_co", covariant=True)
A = TypeVar("A")
B = TypeVar("B")


@dataclass
class Result(MonadPlus[A_co]):
    """
    Holds either a payload or an :py:class:`ArgumentError <argbind.errors.ArgumentError>`.

    >>> Result.return_(1) >= (lambda x: Result.return_(x + 1))
    Result(get=2)

    Sequencing short-circuits on the first failure, which is propagated unchanged:

    >>> failed = Result.zero(ArgumentError("nope"))
    >>> (failed >= (lambda x: Result.return_(x + 1))).error
    ArgumentError(usage='nope')

    ``|`` keeps the first success:

    >>> (failed | Result.return_(3)).value
    3
    """

    get: "A_co | ArgumentError"

    def __bool__(self) -> bool:
        return self.ok

    def __ge__(self, f: Callable[[A_co], Monad[B]]) -> "Result[B]":  # type: ignore[override]
        return self.bind(f)

    def __or__(self, other: "Result[B]") -> "Result[A_co | B]":  # type: ignore[override]
        return self if self.ok else other

    def bind(self, f: Callable[[A_co], Monad[B]]) -> "Result[B]":  # type: ignore[override]
        x = self.get
        if isinstance(x, ArgumentError):
            return Result(x)
        y = f(x)
        assert isinstance(y, Result), y
        return y

    @property
    def error(self) -> Optional[ArgumentError]:
        return self.get if isinstance(self.get, ArgumentError) else None

    @property
    def ok(self) -> bool:
        return not isinstance(self.get, ArgumentError)

    @classmethod
    def return_(cls: "Type[Result[A]]", a: A) -> "Result[A]":  # type: ignore[override]
        return Result(a)

    @property
    def value(self) -> A_co:
        """
        The payload of a successful result. Raises the carried error otherwise.

        >>> Result.zero().value
        Traceback (most recent call last):
        ...
        argbind.errors.ZeroError: zero
        """
        x = self.get
        if isinstance(x, ArgumentError):
            raise x
        return x

    @classmethod
    def zero(cls, error: Optional[ArgumentError] = None) -> "Result[A]":  # type: ignore[override]
        return Result(ZeroError("zero") if error is None else error)
