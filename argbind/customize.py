"""
Customization of the characters used to recognize and split options.
"""
import abc

TOKEN_DELIMITERS = " ="
OPTION_PREFIX = "-"


class ParserCustomization(abc.ABC):
    @abc.abstractmethod
    def token_delimiters(self) -> str:
        """
        Characters that split a single argument into an option and its value.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def option_prefix(self) -> str:
        """
        Characters that, used once or twice, mark an argument as an option.
        """
        raise NotImplementedError


class DefaultParserCustomization(ParserCustomization):
    """
    Splits on space or ``=`` and recognizes ``-x`` and ``--long`` options.

    >>> c = DefaultParserCustomization()
    >>> c.token_delimiters(), c.option_prefix()
    (' =', '-')
    """

    def token_delimiters(self) -> str:
        return TOKEN_DELIMITERS

    def option_prefix(self) -> str:
        return OPTION_PREFIX
