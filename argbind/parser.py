"""
Defines the :py:class:`Parser` base class that every parser kind implements, the
:py:class:`ParseState` produced by a single match attempt, and
:py:class:`BoundParser`, the common base for parsers that fill in a destination.
"""
from __future__ import annotations

import abc
import copy
import logging as logmod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable, List, Optional, TypeVar, Union, overload

from argbind.args import Args
from argbind.bound import BoundRef
from argbind.cardinality import UNBOUNDED, Cardinality
from argbind.customize import DefaultParserCustomization, ParserCustomization
from argbind.errors import UnrecognizedTokenError
from argbind.result import Result
from argbind.tokens import TokenStream

logging = logmod.getLogger(__name__)

P = TypeVar("P", bound="BoundParser")


class ParseResultType(Enum):
    MATCHED = auto()
    NO_MATCH = auto()
    SHORT_CIRCUIT_ALL = auto()


@dataclass(frozen=True)
class ParseState:
    """
    The outcome of one match attempt.

    Parameters
    ----------

    type : ParseResultType
        Whether the parser matched, did not match, or asked for parsing to stop early
        (as :py:class:`Help <argbind.parsers.Help>` does).

    remaining : TokenStream
        The tokens left after the match. Unchanged when nothing matched.
    """

    type: ParseResultType
    remaining: TokenStream

    @classmethod
    def matched(cls, remaining: TokenStream) -> "ParseState":
        return cls(ParseResultType.MATCHED, remaining)

    @classmethod
    def no_match(cls, remaining: TokenStream) -> "ParseState":
        return cls(ParseResultType.NO_MATCH, remaining)


@dataclass(frozen=True)
class HelpTextItem:
    option: str
    description: str


def unrecognized(tokens: TokenStream) -> Result[ParseState]:
    token = tokens.current()
    text = "" if token is None else token.text
    return Result(UnrecognizedTokenError(usage=f"Unrecognized token: {text}", unexpected=text))


class Parser(abc.ABC):
    """
    Base for all argument parser types.
    """

    def __or__(self, other: "Parser") -> "Parser":
        from argbind.parsers import Group

        return Group(self, other)

    def cardinality(self) -> Cardinality:
        return Cardinality(0, 1)

    def clone(self) -> Optional["Parser"]:
        """
        Returns an independent copy that shares bound destinations with ``self``,
        or ``None`` if this kind of parser cannot be copied.
        """
        return None

    def get_help_text(self) -> List[HelpTextItem]:
        return []

    def get_usage_text(self) -> str:
        return ""

    def has_capacity(self) -> bool:
        return True

    def is_optional(self) -> bool:
        return self.cardinality().is_optional()

    @abc.abstractmethod
    def parse(
        self, exe_name: str, tokens: TokenStream, customize: ParserCustomization
    ) -> Result[ParseState]:
        """
        Attempts a match at the current position of ``tokens``. A parser that does not
        match returns ``NO_MATCH`` with ``tokens`` unchanged and has no side effects.
        """
        raise NotImplementedError

    def parse_args(
        self,
        args: Union[Args, Iterable[str], None] = None,
        customize: Optional[ParserCustomization] = None,
    ) -> Result[ParseState]:
        """
        The main entry point: tokenizes ``args``, matches them and then validates
        every parser.

        Parameters
        ----------
        args : Args | Iterable[str] | None
            The arguments to parse, without the program name unless given as
            :py:class:`Args <argbind.args.Args>`. Defaults to ``sys.argv``.
        customize : Optional[ParserCustomization]
            Delimiter and prefix characters. Defaults to
            :py:class:`DefaultParserCustomization <argbind.customize.DefaultParserCustomization>`.

        The state of bound destinations after a failed parse is unspecified: values
        bound before the failure are kept and callbacks may have been called.
        """
        if isinstance(args, Args):
            _args = args
        elif args is None:
            _args = Args.from_argv()
        else:
            _args = Args("", tuple(args))
        _customize = DefaultParserCustomization() if customize is None else customize
        tokens = TokenStream.make(
            _args, _customize.token_delimiters(), _customize.option_prefix()
        )
        self.reset()
        return self.parse(_args.exe_name, tokens, _customize) >= self._finish

    def _finish(self, state: ParseState) -> Result[ParseState]:
        if state.type is ParseResultType.SHORT_CIRCUIT_ALL:
            return Result.return_(state)
        if state.remaining:
            return unrecognized(state.remaining)
        return self.validate() >= (lambda _: Result.return_(state))

    def remaining_capacity(self) -> float:
        return self.cardinality().remaining_capacity()

    def reset(self) -> None:
        """
        Forgets how many times this parser has matched.
        """

    def validate(self) -> Result[None]:
        return Result.return_(None)


class BoundParser(Parser):
    """
    Common code and state for parsers that own a
    :py:class:`BoundRef <argbind.bound.BoundRef>`: a hint, a description,
    a cardinality and the number of times it has matched so far.
    """

    def __init__(self, ref: BoundRef, hint: str = ""):
        self.ref = ref
        self.hint = hint
        self.description = ""
        self.count = 0
        if ref.is_container():
            self._cardinality = Cardinality(0, UNBOUNDED)
        else:
            self._cardinality = Cardinality(0, 1)

    def __call__(self: P, description: str) -> P:
        self.description = description
        return self

    @overload
    def cardinality(self) -> Cardinality:
        ...

    @overload
    def cardinality(self: P, n: int) -> P:
        ...

    @overload
    def cardinality(self: P, n: int, m: int) -> P:
        ...

    def cardinality(self, n: Optional[int] = None, m: Optional[int] = None) -> Any:
        """
        Without arguments, returns the cardinality. ``cardinality(n)`` requires exactly
        ``n`` matches and ``cardinality(n, m)`` between ``n`` and ``m``, where ``m == 0``
        means no upper bound.
        """
        if n is None:
            return self._cardinality
        self._cardinality = Cardinality(n, n if m is None else m)
        return self

    def clone(self) -> Optional[Parser]:
        return copy.copy(self)

    def has_capacity(self) -> bool:
        return self._cardinality.admits(self.count)

    def help(self: P, description: str) -> P:
        return self(description)

    def label(self) -> str:
        return self.hint

    def optional(self: P) -> P:
        return self.cardinality(0, 1)

    def record(self, result: Result[Any]) -> Result[Any]:
        """
        Counts a successful bind towards the cardinality.
        """
        if result:
            self.count += 1
            logging.debug("%s bound %r (%d)", self.label(), result.value, self.count)
        return result

    def required(self: P) -> P:
        return self.cardinality(1, 1)

    def reset(self) -> None:
        self.count = 0

    def validate(self) -> Result[None]:
        checked = self._cardinality.check(self.count, self.label())
        if not checked:
            logging.debug("Validation failed: %s", checked.error)
        return checked >= (lambda _: Result.return_(None))
