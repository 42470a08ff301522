"""
Defines :py:class:`TokenStream`, an immutable cursor over the raw arguments that
produces classified :py:class:`Token` objects one at a time.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Generator, Iterable, List, Optional, Tuple

from argbind.customize import OPTION_PREFIX, TOKEN_DELIMITERS


class TokenType(Enum):
    OPTION = auto()
    ARGUMENT = auto()


@dataclass(frozen=True)
class Token:
    """
    One lexical unit of the input.

    Parameters
    ----------

    type : TokenType
        ``OPTION`` if the text starts with a prefix character, ``ARGUMENT`` otherwise.

    text : str
        The text of the token, without any delimiter.

    split : bool
        Whether the token was split off a delimiter-joined argument like ``--name=value``.
    """

    type: TokenType
    text: str
    split: bool = False

    @property
    def is_option(self) -> bool:
        return self.type is TokenType.OPTION


@dataclass(frozen=True)
class TokenStream:
    """
    A cursor over a sequence of arguments. Advancing returns a new cursor and never
    changes the original, so several parsers can try to match at the same position.

    >>> stream = TokenStream.make(["--name=Alice", "-v", "file.txt"])
    >>> stream.current()
    Token(type=<TokenType.OPTION: 1>, text='--name', split=True)
    >>> [t.text for t in stream.advance()]
    ['Alice', '-v', 'file.txt']
    >>> [t.text for t in stream]
    ['--name', 'Alice', '-v', 'file.txt']

    Only the first delimiter splits, and plain values are never split:

    >>> [t.text for t in TokenStream.make(["--define=a=b", "x=y"])]
    ['--define', 'a=b', 'x=y']
    """

    args: Tuple[str, ...]
    delimiters: str = TOKEN_DELIMITERS
    prefix: str = OPTION_PREFIX
    index: int = 0
    part: int = 0

    def __bool__(self) -> bool:
        return self.index < len(self.args)

    def __iter__(self) -> Generator[Token, None, None]:
        stream = self
        while stream:
            token = stream.current()
            assert token is not None
            yield token
            stream = stream.advance()

    def _is_option(self, arg: str) -> bool:
        return len(arg) > 1 and arg[0] in self.prefix

    def _split(self, arg: str) -> Tuple[Token, ...]:
        if not self._is_option(arg):
            return (Token(TokenType.ARGUMENT, arg),)
        i = next((i for i, c in enumerate(arg) if c in self.delimiters), None)
        if i is None:
            return (Token(TokenType.OPTION, arg),)
        return (
            Token(TokenType.OPTION, arg[:i], split=True),
            Token(TokenType.ARGUMENT, arg[i + 1 :], split=True),
        )

    def advance(self) -> "TokenStream":
        """
        Returns a cursor positioned after the current token. An exhausted cursor
        stays exhausted.
        """
        if not self:
            return self
        if self.part + 1 < len(self._split(self.args[self.index])):
            return replace(self, part=self.part + 1)
        return replace(self, index=self.index + 1, part=0)

    def current(self) -> Optional[Token]:
        """
        Returns the token at the cursor, or ``None`` once the arguments are exhausted.

        >>> TokenStream.make([]).current() is None
        True
        """
        if not self:
            return None
        return self._split(self.args[self.index])[self.part]

    @classmethod
    def make(
        cls,
        arguments: Iterable[str],
        delimiters: str = TOKEN_DELIMITERS,
        prefix: str = OPTION_PREFIX,
    ) -> "TokenStream":
        return cls(tuple(arguments), delimiters=delimiters, prefix=prefix)

    @property
    def position(self) -> Tuple[int, int]:
        return self.index, self.part

    def remaining(self) -> List[str]:
        """
        The raw texts not yet consumed, starting with the current token.

        >>> TokenStream.make(["--x=1", "y"]).advance().remaining()
        ['1', 'y']
        """
        return [t.text for t in self]
