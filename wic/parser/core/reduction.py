"""
Reduction of a declaration's value window to a single operand.

Literal tokens become anonymous variables first. Each identifier is then
looked at against its neighbours in that original sequence: when the left
neighbour's kind has an action whose literal syntax is the identifier's text,
the action is applied to the left operand with the right operand (if any) as
argument, and both neighbours are consumed. Any other identifier is a
reference to an earlier declaration. Only one operator application per
operand pair is possible, so `2 + 3 + 4` leaves two results and is
irreducible.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Union

from wic.exceptions import ErrorCode, ParseError
from wic.lexer.classes import Token, TokenType
from wic.model import Operand, Program, Variable, VariableReference, operator_symbols

from ..utils.helpers import anonymous_literal, pointing_at


@dataclass
class Reduced:
    operand: Operand


@dataclass
class Irreducible:
    remaining: List[Operand]


Reduction = Union[Reduced, Irreducible]

# Harvested once from the registered kind actions
OPERATOR_SYMBOLS = frozenset(operator_symbols())


def _reference(token: Token, program: Program) -> VariableReference:
    with pointing_at(token.position):
        return VariableReference(token.value, program)


def _operand(item: Union[Operand, Token, None], program: Program) -> Optional[Operand]:
    """Resolves a neighbouring slot to an operand; operator symbols and missing slots give None."""
    if item is None:
        return None
    if not isinstance(item, Token):
        return item
    if item.value in OPERATOR_SYMBOLS:
        return None
    return _reference(item, program)


def _apply(symbol: Token, subject: Operand, argument: Optional[Operand]) -> Optional[Operand]:
    action = subject.find_action(symbol.value)
    if action is None:
        return None

    arguments = [argument] if argument is not None else []
    with pointing_at(symbol.position):
        for index, operand in enumerate(arguments):
            if not action.accepts(index, operand.type):
                raise ParseError(ErrorCode.ARGUMENT_KIND_MISMATCH, action=action.name, kind=subject.type, provided=operand.type)
        return action.apply(subject, *arguments)


def reduce_window(window: Sequence[Token], program: Program) -> Reduction:
    """
    Folds a window of string, numeric and identifier tokens into one operand.
    Names are resolved against `program`, which is only read.
    """
    coarse: List[Union[Variable, Token]] = [token if token.type is TokenType.IDENTIFIER else anonymous_literal(token) for token in window]
    fine: Dict[int, Operand] = {index: item for index, item in enumerate(coarse) if isinstance(item, Variable)}
    consumed: Set[int] = set()

    for index, item in enumerate(coarse):
        if not isinstance(item, Token) or index in consumed:
            continue

        prev = _operand(coarse[index - 1], program) if index > 0 else None
        next_ = _operand(coarse[index + 1], program) if index + 1 < len(coarse) else None

        reduced = _apply(item, prev, next_) if prev is not None else None
        if reduced is None:
            fine[index] = _reference(item, program)
            continue

        fine[index] = reduced
        consumed.update({index - 1, index + 1})

    remaining = [fine[index] for index in range(len(coarse)) if index not in consumed]
    if len(remaining) == 1:
        return Reduced(remaining[0])
    return Irreducible(remaining)
