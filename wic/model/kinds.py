"""
The closed set of value kinds understood by the front end.

Every kind is a member of `ValueKind`; its validity predicate and its action
table are looked up by tag in `PREDICATES` and `ACTION_REGISTRY`. Integer and
float kinds share the numeric helpers below instead of an inheritance chain.
Actions are registered into `ACTION_REGISTRY` by `wic.model.actions` when the
package is imported.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..config.config import FLOAT_BOUNDS, INTEGER_BOUNDS


class ValueKind(str, Enum):
    STRING = "string"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    CHAR = "char"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


INTEGER_KINDS: FrozenSet[ValueKind] = frozenset(ValueKind(name) for name in INTEGER_BOUNDS)
FLOAT_KINDS: FrozenSet[ValueKind] = frozenset(ValueKind(name) for name in FLOAT_BOUNDS)
NUMERIC_KINDS: FrozenSet[ValueKind] = INTEGER_KINDS | FLOAT_KINDS


# --- Validity predicates ---


def is_number(value: Any) -> bool:
    # bool is an int subclass in Python but never a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_whole_number(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return is_number(value)


def _within(value: Any, bounds: Tuple[Any, Any]) -> bool:
    low, high = bounds
    return low <= value <= high


def _integer_predicate(kind: ValueKind) -> Callable[[Any], bool]:
    bounds = INTEGER_BOUNDS[kind.value]
    return lambda value: is_whole_number(value) and _within(value, bounds)


def _float_predicate(kind: ValueKind) -> Callable[[Any], bool]:
    bounds = FLOAT_BOUNDS[kind.value]
    return lambda value: is_number(value) and _within(value, bounds)


PREDICATES: Dict[ValueKind, Callable[[Any], bool]] = {
    **{kind: _integer_predicate(kind) for kind in INTEGER_KINDS},
    **{kind: _float_predicate(kind) for kind in FLOAT_KINDS},
    ValueKind.BOOL: lambda value: isinstance(value, bool),
    ValueKind.CHAR: lambda value: isinstance(value, str) and len(value) == 1,
    ValueKind.STRING: lambda value: isinstance(value, str),
    ValueKind.OBJECT: lambda value: isinstance(value, Mapping),
}


def is_admissible(value: Any, kind: ValueKind) -> bool:
    """Answers whether `value` may be held by a variable of `kind`."""
    return PREDICATES[kind](value)


def normalize(value: Any, kind: ValueKind) -> Any:
    """Converts an admissible value to the representation stored for `kind`."""
    if kind in INTEGER_KINDS:
        return int(value)
    if kind in FLOAT_KINDS:
        return float(value)
    if kind is ValueKind.OBJECT:
        return dict(value)
    return value


def infer_kind(value: Any) -> Optional[ValueKind]:
    """Picks a kind for a plain Python value, e.g. an object member."""
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.I64
    if isinstance(value, float):
        return ValueKind.F64
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return None


# --- Actions ---


@dataclass(frozen=True)
class Action:
    """
    A named operation a kind supports. `arguments` holds one set of accepted
    kinds per positional argument; with `spread_arguments` the last set also
    covers any number of trailing arguments.
    """

    name: str
    literal_syntax: Optional[str]
    spread_arguments: bool
    arguments: Tuple[FrozenSet[ValueKind], ...]
    apply: Callable = field(compare=False, repr=False)

    def accepts(self, index: int, kind: ValueKind) -> bool:
        if not self.arguments:
            return False
        if index >= len(self.arguments):
            if not self.spread_arguments:
                return False
            index = len(self.arguments) - 1
        return kind in self.arguments[index]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "literal_syntax": self.literal_syntax,
            "spread_arguments": self.spread_arguments,
            "arguments": [sorted(kind.value for kind in accepted) for accepted in self.arguments],
        }


ACTION_REGISTRY: Dict[ValueKind, Dict[str, Action]] = {kind: {} for kind in ValueKind}


def register_action(kinds: Iterable[ValueKind], action: Action) -> None:
    for kind in kinds:
        ACTION_REGISTRY[kind][action.name] = action


def operator_symbols() -> List[str]:
    """Every literal syntax symbol registered by any kind, sorted."""
    symbols = {action.literal_syntax for actions in ACTION_REGISTRY.values() for action in actions.values() if action.literal_syntax}
    return sorted(symbols)
