"""
Bound references connect a parsed string token to a destination of any type.

The parsers only see the narrow :py:class:`BoundRef` interface ("accept this
text, report the outcome"), so the engine itself never needs to know the value
type of the destination it is filling in.
"""
from __future__ import annotations

import abc
import inspect
import logging as logmod
import typing
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

from argbind.convert import from_string
from argbind.errors import ApplicationError, ArgumentError
from argbind.result import Result

logging = logmod.getLogger(__name__)

A = TypeVar("A")


@dataclass
class Var(Generic[A]):
    """
    A mutable holder for a single parsed value.

    >>> count = Var(0)
    >>> bound_value(count).bind("3").ok
    True
    >>> count.value
    3
    """

    value: A


class BoundRef(abc.ABC):
    type: Callable[[str], Any] = str

    def is_container(self) -> bool:
        return False

    def is_flag(self) -> bool:
        return False

    def bind(self, text: str) -> Result[Any]:
        """
        Converts ``text`` and applies the value to the destination. On a conversion
        failure the destination is left untouched.
        """
        return from_string(text, self.type) >= self.apply

    @abc.abstractmethod
    def apply(self, value: Any) -> Result[Any]:
        raise NotImplementedError


class BoundValueRef(BoundRef):
    def __init__(self, var: Var, type: Optional[Callable[[str], Any]] = None):
        self.var = var
        if type is None and var.value is not None:
            type = var.value.__class__
        self.type = str if type is None else type

    def apply(self, value: Any) -> Result[Any]:
        self.var.value = value
        return Result.return_(value)


class BoundContainerRef(BoundRef):
    def __init__(self, container: List[Any], type: Callable[[str], Any] = str):
        self.container = container
        self.type = type

    def apply(self, value: Any) -> Result[Any]:
        self.container.append(value)
        return Result.return_(value)

    def is_container(self) -> bool:
        return True


def invoke(f: Callable[[Any], Any], value: Any) -> Result[Any]:
    """
    Calls a callback destination. Raising an exception or returning an
    :py:class:`ArgumentError` or failed :py:class:`Result` rejects the value.

    >>> invoke(lambda v: None, 1).ok
    True
    >>> invoke(lambda v: 1 / 0, 1).error.usage
    'Callback rejected value 1: division by zero'
    """
    try:
        returned = f(value)
    except Exception as e:
        returned = e
    if isinstance(returned, Result):
        returned = returned.error
    if isinstance(returned, Exception):
        reason = returned.usage if isinstance(returned, ArgumentError) else str(returned)
        logging.debug("Callback %r rejected %r: %s", f, value, reason)
        return Result(
            ApplicationError(
                usage=f"Callback rejected value {value!r}: {reason}",
                value=value,
                exception=returned,
            )
        )
    return Result.return_(value)


class BoundLambda(BoundRef):
    def __init__(self, f: Callable[[Any], Any], type: Optional[Callable[[str], Any]] = None):
        self.f = f
        self.type = parameter_type(f) if type is None else type

    def apply(self, value: Any) -> Result[Any]:
        return invoke(self.f, value)


class BoundFlagRefBase(BoundRef):
    type = bool

    def is_flag(self) -> bool:
        return True

    def apply(self, value: Any) -> Result[Any]:
        return self.set_flag(value)

    @abc.abstractmethod
    def set_flag(self, flag: bool) -> Result[Any]:
        raise NotImplementedError


class BoundFlagRef(BoundFlagRefBase):
    def __init__(self, var: Var[bool]):
        self.var = var

    def set_flag(self, flag: bool) -> Result[Any]:
        self.var.value = flag
        return Result.return_(flag)


class BoundFlagLambda(BoundFlagRefBase):
    def __init__(self, f: Callable[[bool], Any]):
        self.f = f

    def set_flag(self, flag: bool) -> Result[Any]:
        return invoke(self.f, flag)


def parameter_type(f: Callable[..., Any]) -> Callable[[str], Any]:
    """
    The annotated type of the first parameter of ``f``, or ``str``.

    >>> def on_port(port: int): ...
    >>> parameter_type(on_port)
    <class 'int'>
    >>> parameter_type(lambda name: None)
    <class 'str'>
    """
    try:
        parameters = list(inspect.signature(f).parameters)
        hints = typing.get_type_hints(f)
    except (NameError, TypeError, ValueError):
        return str
    annotation = hints.get(parameters[0]) if parameters else None
    return annotation if isinstance(annotation, type) else str


def bound_value(dest: Any, type: Optional[Callable[[str], Any]] = None) -> BoundRef:
    """
    Wraps a :py:class:`Var`, a ``list`` or a callback into a value-accepting reference.
    """
    if isinstance(dest, BoundRef):
        return dest
    if isinstance(dest, Var):
        return BoundValueRef(dest, type)
    if isinstance(dest, list):
        return BoundContainerRef(dest, str if type is None else type)
    if callable(dest):
        return BoundLambda(dest, type)
    raise TypeError(f"Cannot bind to destination of type {dest.__class__.__name__}")


def bound_flag(dest: Any) -> BoundRef:
    """
    Wraps a :py:class:`Var` or a callback into a reference that is set to ``True``
    when its flag is seen.

    >>> verbose = Var(False)
    >>> bound_flag(verbose).set_flag(True).value
    True
    >>> verbose
    Var(value=True)
    """
    if isinstance(dest, BoundRef):
        return dest
    if isinstance(dest, Var):
        return BoundFlagRef(dest)
    if callable(dest):
        return BoundFlagLambda(dest)
    raise TypeError(f"Cannot bind a flag to destination of type {dest.__class__.__name__}")
