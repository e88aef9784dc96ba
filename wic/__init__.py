"""
Front end of the Wi language: lexer, static type/value model and parser.
"""

from .compiler import compile_wi
from .exceptions import ErrorCode, LexError, ParseError, ValidationError, WiError
from .lexer import Token, TokenType, tokenize
from .model import FunctionCall, Program, ValueKind, Variable, VariableReference, create_variable, is_admissible
from .parser import parse_tokens, parse_wi, reduce_window
