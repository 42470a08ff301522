"""
Defines :py:class:`Args`, the program name together with the arguments to parse.
"""
import sys
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Args:
    """
    >>> args = Args.from_argv(["prog", "--verbose", "file.txt"])
    >>> args.exe_name, list(args)
    ('prog', ['--verbose', 'file.txt'])
    """

    exe_name: str
    args: Tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        yield from self.args

    def __len__(self) -> int:
        return len(self.args)

    @classmethod
    def from_argv(cls, argv: Optional[Sequence[str]] = None) -> "Args":
        """
        Splits ``argv`` (``sys.argv`` by default) into the program name and its arguments.
        """
        _argv = sys.argv if argv is None else argv
        if not _argv:
            return cls("", ())
        exe_name, *args = _argv
        return cls(exe_name, tuple(args))
