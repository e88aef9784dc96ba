from .kinds import ACTION_REGISTRY, FLOAT_KINDS, INTEGER_KINDS, NUMERIC_KINDS, Action, ValueKind, is_admissible, operator_symbols
from .nodes import FunctionCall, Node, Operand, Program, Variable, VariableReference, anonymous, create_variable
from . import actions
