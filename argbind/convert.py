"""
The pluggable string-to-value facility used by bound references.

Types without a registered converter are called directly on the text, in the way
``argparse`` treats its ``type`` argument. Use :py:func:`register` to add or
replace a converter.
"""
from typing import Any, Callable, Dict, TypeVar

from argbind.errors import ConversionError
from argbind.result import Result

A = TypeVar("A")

_CONVERTERS: Dict[Any, Callable[[str], Any]] = {}


def register(type_: Any) -> Callable[[Callable[[str], A]], Callable[[str], A]]:
    """
    Registers the decorated function as the converter for ``type_``.

    >>> class Celsius(float): ...
    >>> @register(Celsius)
    ... def _celsius(text):
    ...     return Celsius(text.rstrip("C"))
    >>> from_string("21C", Celsius).value
    21.0
    """

    def decorator(f: Callable[[str], A]) -> Callable[[str], A]:
        _CONVERTERS[type_] = f
        return f

    return decorator


def type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


@register(bool)
def _to_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in ("y", "yes", "true", "on", "1"):
        return True
    if lowered in ("n", "no", "false", "off", "0"):
        return False
    raise ValueError(f"Expected a boolean value but did not recognise: '{text}'")


def from_string(text: str, type_: Callable[[str], A] = str) -> Result[A]:  # type: ignore[assignment]
    """
    Converts ``text`` into a value of ``type_``.

    >>> from_string("3", int).value
    3
    >>> from_string("off", bool).value
    False
    >>> from_string("abc", int).error.usage
    "Unable to convert 'abc' to destination type int"
    """
    convert = _CONVERTERS.get(type_, type_)
    try:
        value = convert(text)
    except Exception:
        name = type_name(type_)
        return Result(
            ConversionError(
                usage=f"Unable to convert '{text}' to destination type {name}",
                text=text,
                expected=name,
            )
        )
    return Result.return_(value)
