"""
The program tree handed to the execution engine: variables, references to
them, function calls, and the single flat `Program` scope that owns them.
"""

from typing import Any, Dict, List, Optional, Union

from ..config.config import ANONYMOUS_NAME
from ..exceptions import ErrorCode, ParseError, ValidationError
from .kinds import ACTION_REGISTRY, Action, ValueKind, infer_kind, is_admissible, normalize


class Variable:
    """
    A named value of a fixed kind. Name and value are each assigned exactly
    once, and the value is checked against the kind's predicate before it is
    accepted. Object variables also expose their entries as member variables.
    """

    def __init__(self, kind: ValueKind):
        self._name: Optional[str] = None
        self._type = kind
        self._value: Any = None
        self._assigned = False
        self._actions: Dict[str, Action] = dict(ACTION_REGISTRY[kind])
        self.members: List["Variable"] = []

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def type(self) -> ValueKind:
        return self._type

    @property
    def value(self) -> Any:
        return self._value

    @property
    def actions(self) -> Dict[str, Action]:
        return self._actions

    def set_name(self, name: str) -> "Variable":
        if self._name:
            raise ParseError(ErrorCode.NAME_ALREADY_SET, name=self._name)
        self._name = name
        return self

    def set_value(self, value: Any) -> "Variable":
        if self._assigned:
            raise ValidationError(ErrorCode.VALUE_ALREADY_SET, name=self._name)
        if not is_admissible(value, self._type):
            raise ValidationError(ErrorCode.INVALID_VALUE, value=value, kind=self._type)

        self._value = normalize(value, self._type)
        self._assigned = True
        if self._type is ValueKind.OBJECT:
            self.members = [_member(name, entry) for name, entry in self._value.items()]
        return self

    def get(self, name: str) -> Optional["Variable"]:
        """Looks up an object member by name."""
        return next((member for member in self.members if member.name == name), None)

    def find_action(self, literal_syntax: str) -> Optional[Action]:
        return next((action for action in self._actions.values() if action.literal_syntax == literal_syntax), None)

    def to_dict(self) -> dict:
        return {"node": "variable", "name": self._name, "type": self._type.value, "value": self._value}

    def __repr__(self) -> str:
        return f"Variable(name={self._name!r}, type={self._type.value}, value={self._value!r})"


def create_variable(kind: ValueKind) -> Variable:
    """Produces an unnamed, unassigned variable shell of the given kind."""
    return Variable(kind)


def anonymous(kind: ValueKind, value: Any) -> Variable:
    return create_variable(kind).set_name(ANONYMOUS_NAME).set_value(value)


def _member(name: str, value: Any) -> Variable:
    kind = infer_kind(value)
    if kind is None:
        raise ValidationError(ErrorCode.INVALID_VALUE, value=value, kind=ValueKind.OBJECT)
    return create_variable(kind).set_name(name).set_value(value)


class VariableReference:
    """
    A handle to a variable declared earlier in the program. The name must
    resolve when the reference is created; the value and kind are looked up
    again on every access.
    """

    def __init__(self, name: str, scope: "Program"):
        self.name = name
        self.scope = scope
        if scope.find_variable(name) is None:
            raise ParseError(ErrorCode.VARIABLE_NOT_FOUND, name=name)

    def _resolve(self) -> Variable:
        return self.scope.find_variable(self.name)

    @property
    def value(self) -> Any:
        return self._resolve().value

    @property
    def type(self) -> ValueKind:
        return self._resolve().type

    @property
    def actions(self) -> Dict[str, Action]:
        return self._resolve().actions

    def find_action(self, literal_syntax: str) -> Optional[Action]:
        return self._resolve().find_action(literal_syntax)

    def get(self, name: str) -> Optional[Variable]:
        return self._resolve().get(name)

    def to_dict(self) -> dict:
        return {"node": "reference", "name": self.name}

    def __repr__(self) -> str:
        return f"VariableReference(name={self.name!r})"


Operand = Union[Variable, VariableReference]


class FunctionCall:
    def __init__(self):
        self._function_name = ""
        self._arguments: List[Operand] = []

    @property
    def function_name(self) -> str:
        return self._function_name

    @property
    def name(self) -> str:
        return self._function_name

    @property
    def arguments(self) -> List[Operand]:
        return self._arguments

    def set_function_name(self, name: str) -> "FunctionCall":
        if self._function_name:
            raise ParseError(ErrorCode.NAME_ALREADY_SET, name=self._function_name)
        self._function_name = name
        return self

    def set_arguments(self, arguments: List[Operand]) -> "FunctionCall":
        self._arguments = list(arguments)
        return self

    def to_dict(self) -> dict:
        return {"node": "call", "function_name": self._function_name, "arguments": [argument.to_dict() for argument in self._arguments]}

    def __repr__(self) -> str:
        return f"FunctionCall(function_name={self._function_name!r}, arguments={self._arguments!r})"


Node = Union[Variable, FunctionCall]


class Program:
    """The single, flat scope of a Wi program: its top-level nodes in order."""

    def __init__(self):
        self.body: List[Node] = []

    def append(self, node: Node) -> None:
        self.body.append(node)

    def find_variable(self, name: str) -> Optional[Variable]:
        return next((node for node in self.body if isinstance(node, Variable) and node.name == name), None)

    def has_name(self, name: str) -> bool:
        return any(node.name == name for node in self.body)

    @property
    def variables(self) -> List[Variable]:
        return [node for node in self.body if isinstance(node, Variable)]

    @property
    def calls(self) -> List[FunctionCall]:
        return [node for node in self.body if isinstance(node, FunctionCall)]

    def to_dict(self) -> dict:
        return {"body": [node.to_dict() for node in self.body]}
