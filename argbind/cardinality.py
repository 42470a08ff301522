"""
Defines :py:class:`Cardinality`, the (minimum, maximum) number of times a parser
may match. A maximum of ``0`` means there is no upper bound.
"""
import math
from dataclasses import dataclass
from typing import Iterator

from argbind.errors import CardinalityError, DeclarationError
from argbind.result import Result

UNBOUNDED = 0


@dataclass(frozen=True)
class Cardinality:
    """
    >>> minimum, maximum = Cardinality(1, 3)
    >>> minimum, maximum
    (1, 3)
    >>> Cardinality(0, 1).is_optional(), Cardinality(1, 1).is_optional()
    (True, False)
    >>> Cardinality(0, UNBOUNDED).remaining_capacity()
    inf

    Declaring a range that can never be satisfied fails immediately:

    >>> Cardinality(2, 1)
    Traceback (most recent call last):
    ...
    argbind.errors.DeclarationError: Cardinality minimum 2 exceeds maximum 1
    """

    minimum: int = 0
    maximum: int = 1

    def __post_init__(self):
        if self.minimum < 0 or self.maximum < 0:
            raise DeclarationError(
                f"Cardinality bounds must be non-negative, got ({self.minimum}, {self.maximum})"
            )
        if not self.unbounded and self.minimum > self.maximum:
            raise DeclarationError(
                f"Cardinality minimum {self.minimum} exceeds maximum {self.maximum}"
            )

    def __iter__(self) -> Iterator[int]:
        yield self.minimum
        yield self.maximum

    def __str__(self) -> str:
        if self.unbounded:
            return f"at least {self.minimum}"
        if self.minimum == self.maximum:
            return f"exactly {self.minimum}"
        if self.minimum == 0:
            return f"at most {self.maximum}"
        return f"between {self.minimum} and {self.maximum}"

    def admits(self, count: int) -> bool:
        """
        Whether a parser that has matched ``count`` times may match again.
        """
        return self.unbounded or count < self.maximum

    def check(self, count: int, name: str) -> Result[int]:
        """
        >>> Cardinality(1, 1).check(0, "--name").error.usage
        'Expected exactly 1 occurrence(s) of --name, got 0'
        >>> Cardinality(0, UNBOUNDED).check(7, "FILE").value
        7
        """
        if count >= self.minimum and (self.unbounded or count <= self.maximum):
            return Result.return_(count)
        return Result(
            CardinalityError(
                usage=f"Expected {self} occurrence(s) of {name}, got {count}",
                name=name,
                minimum=self.minimum,
                maximum=self.maximum,
                observed=count,
            )
        )

    def is_optional(self) -> bool:
        return self.minimum == 0 and (self.unbounded or self.maximum > 0)

    def is_required(self) -> bool:
        return self.minimum >= 1

    def remaining_capacity(self) -> float:
        if self.unbounded:
            return math.inf
        return self.maximum - self.minimum

    @property
    def unbounded(self) -> bool:
        return self.maximum == UNBOUNDED
