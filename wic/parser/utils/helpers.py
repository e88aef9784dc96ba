from contextlib import contextmanager
from typing import Any, Iterator, Union

from wic.config.config import ANONYMOUS_NAME, DEFAULT_FLOAT_KIND, DEFAULT_INTEGER_KIND
from wic.exceptions import WiError
from wic.lexer.classes import Token, TokenType
from wic.model import Variable, ValueKind, create_variable
from wic.model.kinds import is_number


@contextmanager
def pointing_at(position: int) -> Iterator[None]:
    """Attaches `position` to any front-end error raised inside the block that lacks one."""
    try:
        yield
    except WiError as e:
        if e.position is None:
            e.position = position
        raise


def infer_literal_kind(text: str) -> ValueKind:
    """Default kind for a number, decided by its surface text only."""
    return ValueKind(DEFAULT_FLOAT_KIND) if "." in text else ValueKind(DEFAULT_INTEGER_KIND)


def infer_token_kind(token: Token) -> ValueKind:
    if token.type is TokenType.STRING:
        return ValueKind.STRING
    return infer_literal_kind(token.value)


def infer_value_kind(value: Any, fallback: ValueKind) -> ValueKind:
    """
    Kind of an un-annotated declaration. Numbers follow their stored form, as a
    decimal literal would (so a computed 8 is i64 and 8.0 is f64, whatever the
    operand kinds were); any other value keeps the kind of the operand it came
    from.
    """
    if is_number(value):
        return ValueKind(DEFAULT_FLOAT_KIND) if isinstance(value, float) else ValueKind(DEFAULT_INTEGER_KIND)
    return fallback


def literal_value(token: Token) -> Union[str, int, float]:
    if token.type is TokenType.STRING:
        return token.value
    return float(token.value) if "." in token.value else int(token.value)


def anonymous_literal(token: Token) -> Variable:
    """Materializes a string or numeric token as an anonymous variable."""
    with pointing_at(token.position):
        return create_variable(infer_token_kind(token)).set_name(ANONYMOUS_NAME).set_value(literal_value(token))
