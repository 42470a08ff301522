"""
Defines the concrete parser kinds: :py:class:`Opt`, :py:class:`Flag`,
:py:class:`Arg`, :py:class:`Help` and the composite :py:class:`Group`.

>>> name, verbose, files = Var(""), Var(False), []
>>> cli = Group(
...     Opt(name, "name", "-n", "--name")("Who to greet."),
...     Flag(verbose, "-v", "--verbose"),
...     Arg(files, "file"),
... )
>>> cli.parse_args(["a.txt", "--name=Alice", "-v", "b.txt"]).ok
True
>>> name.value, verbose.value, files
('Alice', True, ['a.txt', 'b.txt'])
>>> cli.get_usage_text()
'[-n|--name <name>] [-v|--verbose] [<file> ...]'
"""
from __future__ import annotations

import copy
import logging as logmod
from typing import Any, Callable, List, Optional

from argbind.bound import BoundFlagRefBase, Var, bound_flag, bound_value
from argbind.cardinality import Cardinality
from argbind.customize import ParserCustomization
from argbind.errors import DeclarationError, MissingValueError
from argbind.parser import (
    BoundParser,
    HelpTextItem,
    Parser,
    ParseResultType,
    ParseState,
    unrecognized,
)
from argbind.result import Result
from argbind.tokens import Token, TokenStream

logging = logmod.getLogger(__name__)

__all__ = ["Arg", "Flag", "Group", "Help", "Opt", "Var"]


class Opt(BoundParser):
    """
    An option that takes a value, like ``--name Alice`` or ``--name=Alice``.

    >>> port = Var(8080)
    >>> Opt(port, "port", "-p", "--port").parse_args(["--port", "9000"]).ok
    True
    >>> port.value
    9000

    The value has to follow the option:

    >>> Opt(port, "port", "--port").parse_args(["--port"]).error.usage
    'Expected argument following --port'
    """

    def __init__(
        self,
        dest: Any,
        hint: str = "",
        *names: str,
        type: Optional[Callable[[str], Any]] = None,
    ):
        super().__init__(bound_value(dest, type), hint)
        self.names: List[str] = list(names)

    def clone(self) -> Optional[Parser]:
        parser = copy.copy(self)
        parser.names = list(self.names)
        return parser

    def get_help_text(self) -> List[HelpTextItem]:
        option = ", ".join(self.names)
        if self.hint:
            option = f"{option} <{self.hint}>"
        return [HelpTextItem(option, self.description)]

    def get_usage_text(self) -> str:
        usage = "|".join(self.names)
        if self.hint:
            usage = f"{usage} <{self.hint}>"
        return usage

    def is_match(self, token: Token) -> bool:
        return token.is_option and token.text in self.names

    def label(self) -> str:
        return "|".join(self.names) or self.hint

    def name(self, *names: str) -> "Opt":
        self.names.extend(names)
        return self

    def parse(
        self, exe_name: str, tokens: TokenStream, customize: ParserCustomization
    ) -> Result[ParseState]:
        token = tokens.current()
        if token is None or not self.is_match(token):
            return Result.return_(ParseState.no_match(tokens))
        remaining = tokens.advance()
        if isinstance(self.ref, BoundFlagRefBase) and not token.split:
            result = self.record(self.ref.set_flag(True))
            return result >= (lambda _: Result.return_(ParseState.matched(remaining)))
        value = remaining.current()
        if value is None or value.is_option:
            return Result(
                MissingValueError(
                    usage=f"Expected argument following {token.text}",
                    option=token.text,
                )
            )
        result = self.record(self.ref.bind(value.text))
        return result >= (lambda _: Result.return_(ParseState.matched(remaining.advance())))

    def validate(self) -> Result[None]:
        if not self.names:
            return Result(DeclarationError(f"Option {self.label()} has no names"))
        if not all(self.names):
            return Result(DeclarationError("Option name cannot be empty"))
        return super().validate()


class Flag(Opt):
    """
    An option without a value. A :py:class:`Var` destination is set to ``True``;
    a callback is called with ``True``.

    >>> verbose = Var(False)
    >>> Flag(verbose, "-v", "--verbose").parse_args(["-v"]).ok
    True
    >>> verbose.value
    True

    A value can still be given explicitly:

    >>> Flag(verbose, "--verbose").parse_args(["--verbose=no"]).ok
    True
    >>> verbose.value
    False
    """

    def __init__(self, dest: Any, *names: str):
        BoundParser.__init__(self, bound_flag(dest))
        self.names = list(names)


class Arg(BoundParser):
    """
    A positional argument, matching any token that is not an option.

    >>> files = []
    >>> Group(Arg(files, "file")).parse_args(["a.txt", "b.txt"]).ok
    True
    >>> files
    ['a.txt', 'b.txt']
    """

    def __init__(
        self, dest: Any, hint: str = "", type: Optional[Callable[[str], Any]] = None
    ):
        super().__init__(bound_value(dest, type), hint)

    def get_help_text(self) -> List[HelpTextItem]:
        return [HelpTextItem(self.get_usage_text(), self.description)]

    def get_usage_text(self) -> str:
        return f"<{self.hint}>"

    def label(self) -> str:
        return self.get_usage_text()

    def parse(
        self, exe_name: str, tokens: TokenStream, customize: ParserCustomization
    ) -> Result[ParseState]:
        token = tokens.current()
        if token is None or token.is_option:
            return Result.return_(ParseState.no_match(tokens))
        result = self.record(self.ref.bind(token.text))
        return result >= (lambda _: Result.return_(ParseState.matched(tokens.advance())))


class Help(Flag):
    """
    Recognizes ``-?``, ``-h`` and ``--help``. When seen, parsing stops at once and
    validation is skipped, so required arguments may be missing.

    >>> show_help, name = Var(False), Var("")
    >>> result = Group(Help(show_help), Opt(name, "name", "--name").required()).parse_args(["-h"])
    >>> result.value.type
    <ParseResultType.SHORT_CIRCUIT_ALL: 3>
    >>> show_help.value
    True
    """

    def __init__(self, show: Any):
        super().__init__(show, "-?", "-h", "--help")
        self.description = "Display usage information."

    def parse(
        self, exe_name: str, tokens: TokenStream, customize: ParserCustomization
    ) -> Result[ParseState]:
        def short_circuit(state: ParseState) -> Result[ParseState]:
            if state.type is ParseResultType.NO_MATCH:
                return Result.return_(state)
            return Result.return_(
                ParseState(ParseResultType.SHORT_CIRCUIT_ALL, state.remaining)
            )

        return super().parse(exe_name, tokens, customize) >= short_circuit


class Group(Parser):
    """
    Matches tokens against child parsers in declared order until the tokens run out.

    Children that still have room under their cardinality are tried first; the
    others are retried afterwards, so an option given too often still binds and the
    excess is reported by :py:meth:`validate`:

    >>> name = Var("")
    >>> cli = Group(Opt(name, "name", "--name"))
    >>> cli.parse_args(["--name", "a", "--name", "b"]).error.usage
    'Expected at most 1 occurrence(s) of --name, got 2'
    >>> name.value
    'b'

    A token that no child accepts is an error:

    >>> cli.parse_args(["--nmae", "a"]).error.usage
    'Unrecognized token: --nmae'

    Nested groups are matched one token at a time together with their siblings, so
    the same ordering holds across the whole tree.
    """

    def __init__(self, *parsers: Parser):
        self.parsers: List[Parser] = []
        for parser in parsers:
            self.add(parser)

    def __ior__(self, other: Parser) -> "Group":
        return self.add(other)

    def __or__(self, other: Parser) -> "Group":
        return Group(*self.parsers, other)

    def add(self, parser: Parser) -> "Group":
        self.parsers.append(parser)
        return self

    def cardinality(self) -> Cardinality:
        required = any(p.cardinality().is_required() for p in self.parsers)
        return Cardinality(1 if required else 0, 1)

    def clone(self) -> Optional[Parser]:
        clones = [p.clone() for p in self.parsers]
        if any(c is None for c in clones):
            return None
        return Group(*[c for c in clones if c is not None])

    def get_help_text(self) -> List[HelpTextItem]:
        return [item for p in self.parsers for item in p.get_help_text()]

    def get_usage_text(self) -> str:
        def usage(parser: Parser) -> str:
            text = parser.get_usage_text()
            if not text:
                return text
            if parser.remaining_capacity() > 1:
                text = f"{text} ..."
            return f"[{text}]" if parser.is_optional() else text

        return " ".join(u for u in map(usage, self.parsers) if u)

    def has_capacity(self) -> bool:
        return any(p.has_capacity() for p in self.parsers)

    def parse(
        self, exe_name: str, tokens: TokenStream, customize: ParserCustomization
    ) -> Result[ParseState]:
        remaining = tokens
        while remaining:
            result = self._parse_token(exe_name, remaining, customize, overflow=False)
            if result and result.value.type is ParseResultType.NO_MATCH:
                result = self._parse_token(exe_name, remaining, customize, overflow=True)
            if not result:
                return result
            state = result.value
            if state.type is ParseResultType.SHORT_CIRCUIT_ALL:
                return result
            if state.type is ParseResultType.NO_MATCH or state.remaining.position == remaining.position:
                return unrecognized(remaining)
            remaining = state.remaining
        if remaining.position == tokens.position:
            return Result.return_(ParseState.no_match(tokens))
        return Result.return_(ParseState.matched(remaining))

    def _parse_token(
        self,
        exe_name: str,
        tokens: TokenStream,
        customize: ParserCustomization,
        overflow: bool,
    ) -> Result[ParseState]:
        """
        Offers the current token to the children, descending into nested groups.
        Without ``overflow`` only children with capacity left are tried.
        """
        # sorted is stable, so declared order holds within each half
        for parser in sorted(self.parsers, key=lambda p: not p.has_capacity()):
            if not (overflow or parser.has_capacity()):
                break
            if isinstance(parser, Group):
                result = parser._parse_token(exe_name, tokens, customize, overflow)
            else:
                result = parser.parse(exe_name, tokens, customize)
            if not result or result.value.type is not ParseResultType.NO_MATCH:
                logging.debug("%r at %s: %s", parser, tokens.position, result.get)
                return result
        return Result.return_(ParseState.no_match(tokens))

    def reset(self) -> None:
        for parser in self.parsers:
            parser.reset()

    def validate(self) -> Result[None]:
        for parser in self.parsers:
            result = parser.validate()
            if not result:
                return result
        return Result.return_(None)
