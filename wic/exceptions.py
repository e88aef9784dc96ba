"""
Custom exception types for the Wi compiler front end.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):

    # --- Lexing Errors ---
    UNEXPECTED_CHARACTER = "Unexpected token '{char}'."
    UNTERMINATED_NUMBER = "Unexpected end of file while looking for number."
    UNTERMINATED_STRING = "Unexpected end of file while looking for String."
    UNTERMINATED_COMMENT = "Unexpected end of file while looking for the end of a block comment."

    # --- Structural Parsing Errors ---
    UNEXPECTED_TOKEN = "Unexpected token '{found}'."
    EXPECTED_TOKENS = "Expected {expected} but got {found}."
    EXPECTED_ARGUMENT = "Expected argument but got {found}."
    UNEXPECTED_END = "Unexpected end of file, expected {expected}."
    INCALCULABLE_TOKEN = "Unexpected incalculable token '{found}'."

    # --- Type Descriptor Errors ---
    INVALID_TYPE_DESCRIPTOR = "Invalid type descriptor for variable '{name}'."
    UNKNOWN_KIND = "Unknown type '{kind}'."
    UNEXPECTED_TYPE_DESCRIPTOR = "Unexpected type descriptor."

    # --- Name & Expression Errors ---
    VARIABLE_NOT_FOUND = "Variable {name} not found in scope."
    DUPLICATE_NAME = "Variable {name} already defined."
    NAME_ALREADY_SET = "Cannot redefine name '{name}'."
    MISSING_VALUE = "Missing value for variable '{name}'."
    IRREDUCIBLE_EXPRESSION = "Unable to reduce expression to single value."
    ARGUMENT_KIND_MISMATCH = "Action '{action}' of type '{kind}' does not accept an argument of type '{provided}'."
    MEMBER_NOT_FOUND = "Object has no member named '{name}'."

    # --- Validation Errors ---
    INVALID_VALUE = "Value {value!r} is not of type {kind}."
    VALUE_ALREADY_SET = "Cannot reassign variable '{name}'."
    DIVISION_BY_ZERO = "Division by zero while reducing a value of type {kind}."


class WiError(Exception):
    """
    Base class for every fatal front-end error. `position` is the source
    offset the error points at; the parser fills it in from the current token
    when the raising code did not know it.
    """

    def __init__(self, code: ErrorCode, position: Optional[int] = None, **kwargs):
        self.code = code
        self.position = position
        self.details = kwargs
        self.message = code.value.format(**kwargs)
        super().__init__(self.message)


class LexError(WiError):
    pass


class ParseError(WiError):
    pass


class ValidationError(WiError):
    pass


class InternalCompilerError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
