from argbind.args import Args
from argbind.bound import BoundRef, Var, bound_flag, bound_value
from argbind.cardinality import UNBOUNDED, Cardinality
from argbind.convert import from_string, register
from argbind.customize import DefaultParserCustomization, ParserCustomization
from argbind.errors import (
    ApplicationError,
    ArgumentError,
    CardinalityError,
    ConversionError,
    DeclarationError,
    MissingValueError,
    UnrecognizedTokenError,
)
from argbind.parser import BoundParser, HelpTextItem, Parser, ParseResultType, ParseState
from argbind.parsers import Arg, Flag, Group, Help, Opt
from argbind.result import Result
from argbind.tokens import Token, TokenStream, TokenType

__all__ = [
    "Arg",
    "Flag",
    "Group",
    "Help",
    "Opt",
    "Var",
    "Args",
    "Parser",
    "BoundParser",
    "ParseState",
    "ParseResultType",
    "HelpTextItem",
    "BoundRef",
    "bound_value",
    "bound_flag",
    "Cardinality",
    "UNBOUNDED",
    "from_string",
    "register",
    "ParserCustomization",
    "DefaultParserCustomization",
    "Token",
    "TokenStream",
    "TokenType",
    "Result",
    "ArgumentError",
    "ApplicationError",
    "CardinalityError",
    "ConversionError",
    "DeclarationError",
    "MissingValueError",
    "UnrecognizedTokenError",
]
