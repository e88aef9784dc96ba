"""
Implementations of the kind actions, registered into the kind action tables
at import time. Each action receives the subject operand followed by its
argument operands and returns the resulting variable.
"""

import operator

from ..config.config import OPERATOR_ACTION_MAP
from ..exceptions import ErrorCode, ParseError, ValidationError
from .kinds import INTEGER_KINDS, NUMERIC_KINDS, Action, ValueKind, register_action
from .nodes import anonymous

ACTION_SYNTAX = {name: symbol for symbol, name in OPERATOR_ACTION_MAP.items()}


def _numeric_folder(op):
    """Builds a variadic action folding its operands left-to-right into the subject."""

    def folder(subject, *operands):
        result = subject.value
        for operand in operands:
            result = op(result, operand.value)
        return anonymous(subject.type, result)

    return folder


def _divide(subject, *operands):
    result = subject.value
    for operand in operands:
        if operand.value == 0:
            raise ValidationError(ErrorCode.DIVISION_BY_ZERO, kind=subject.type)
        if subject.type in INTEGER_KINDS and isinstance(result, int) and isinstance(operand.value, int):
            # Exact on integers; a remainder has no integer representation
            quotient, remainder = divmod(result, operand.value)
            if remainder:
                raise ValidationError(ErrorCode.INVALID_VALUE, value=f"{result} / {operand.value}", kind=subject.type)
            result = quotient
        else:
            result = result / operand.value
    return anonymous(subject.type, result)


def _get(subject, *operands):
    name = operands[0].value if operands else ""
    member = subject.get(name)
    if member is None:
        raise ParseError(ErrorCode.MEMBER_NOT_FOUND, name=name)
    return member


NUMERIC_ACTIONS = {
    "add": _numeric_folder(operator.add),
    "subtract": _numeric_folder(operator.sub),
    "multiply": _numeric_folder(operator.mul),
    "divide": _divide,
}

for _name, _apply in NUMERIC_ACTIONS.items():
    register_action(
        NUMERIC_KINDS,
        Action(name=_name, literal_syntax=ACTION_SYNTAX[_name], spread_arguments=True, arguments=(NUMERIC_KINDS,), apply=_apply),
    )

register_action(
    [ValueKind.OBJECT],
    Action(name="get", literal_syntax=ACTION_SYNTAX["get"], spread_arguments=False, arguments=(frozenset({ValueKind.STRING}),), apply=_get),
)
