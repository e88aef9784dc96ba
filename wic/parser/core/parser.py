from typing import List, Optional, Tuple

from wic.exceptions import ErrorCode, ParseError
from wic.lexer.classes import Token, TokenType
from wic.lexer.lexer import tokenize
from wic.model import FunctionCall, Node, Operand, Program, ValueKind, Variable, VariableReference, create_variable

from ..utils.helpers import anonymous_literal, infer_value_kind, pointing_at
from .reduction import Irreducible, reduce_window

CALCULABLE_TOKENS = {TokenType.STRING, TokenType.NUMERIC, TokenType.IDENTIFIER, TokenType.TYPE_DESCRIPTOR}
ARGUMENT_TOKENS = {TokenType.IDENTIFIER, TokenType.STRING, TokenType.NUMERIC}


class WiParser:
    """
    Builds the flat program tree from a token sequence, one top-level node at
    a time. Every node is either a declaration (`let name = value [as kind];`)
    or a single-level call (`name(arg, ...)`); names are unique across the
    whole program.
    """

    def __init__(self, tokens: List[Token], source: str):
        self.tokens = tokens
        self.source = source
        self.program = Program()
        self.index = 0

    def parse(self) -> Program:
        while self.index < len(self.tokens):
            with pointing_at(self._current_position()):
                node = self._parse_node()
            self.program.append(node)
        return self.program

    # --- Token cursor helpers ---

    def _current_position(self) -> int:
        if self.index < len(self.tokens):
            return self.tokens[self.index].position
        return len(self.source)

    def _peek(self, offset: int = 0) -> Optional[Token]:
        if self.index + offset < len(self.tokens):
            return self.tokens[self.index + offset]
        return None

    def _expect(self, *types: TokenType) -> List[Token]:
        expected = ", ".join(str(t) for t in types)
        buffer = self.tokens[self.index : self.index + len(types)]
        if len(buffer) < len(types):
            raise ParseError(ErrorCode.UNEXPECTED_END, position=len(self.source), expected=expected)
        if any(token.type is not token_type for token, token_type in zip(buffer, types)):
            found = ", ".join(str(token.type) for token in buffer)
            raise ParseError(ErrorCode.EXPECTED_TOKENS, position=buffer[0].position, expected=expected, found=found)

        self.index += len(types)
        return buffer

    def _ensure_unique(self, name: Token) -> None:
        if self.program.has_name(name.value):
            raise ParseError(ErrorCode.DUPLICATE_NAME, position=name.position, name=name.value)

    # --- Node dispatch ---

    def _parse_node(self) -> Node:
        token = self.tokens[self.index]

        if token.type is TokenType.DECLARATION:
            return self._parse_declaration()

        following = self._peek(1)
        if token.type is TokenType.IDENTIFIER and following is not None and following.type is TokenType.OPEN_PAREN:
            return self._parse_call()

        raise ParseError(ErrorCode.UNEXPECTED_TOKEN, position=token.position, found=token.describe())

    def _parse_declaration(self) -> Variable:
        self.index += 1
        name, _ = self._expect(TokenType.IDENTIFIER, TokenType.ASSIGNER)

        window = self._collect_window()
        kind, window = self._split_type_descriptor(name, window)

        misplaced = next((token for token in window if token.type is TokenType.TYPE_DESCRIPTOR), None)
        if misplaced is not None:
            raise ParseError(ErrorCode.UNEXPECTED_TYPE_DESCRIPTOR, position=misplaced.position)
        if not window:
            raise ParseError(ErrorCode.MISSING_VALUE, name=name.value)

        reduction = reduce_window(window, self.program)
        if isinstance(reduction, Irreducible):
            raise ParseError(ErrorCode.IRREDUCIBLE_EXPRESSION, position=window[0].position)

        operand = reduction.operand
        if kind is None:
            kind = infer_value_kind(operand.value, operand.type)

        self._ensure_unique(name)
        self._expect(TokenType.END)

        with pointing_at(window[0].position):
            return create_variable(kind).set_name(name.value).set_value(operand.value)

    def _collect_window(self) -> List[Token]:
        """Collects the calculable tokens between the assigner and the terminator."""
        window = []
        while True:
            token = self._peek()
            if token is None:
                raise ParseError(ErrorCode.UNEXPECTED_END, position=len(self.source), expected=str(TokenType.END))
            if token.type is TokenType.END:
                return window
            if token.type not in CALCULABLE_TOKENS:
                raise ParseError(ErrorCode.INCALCULABLE_TOKEN, position=token.position, found=token.describe())
            window.append(token)
            self.index += 1

    def _split_type_descriptor(self, name: Token, window: List[Token]) -> Tuple[Optional[ValueKind], List[Token]]:
        if len(window) < 2 or window[-2].type is not TokenType.TYPE_DESCRIPTOR:
            return None, window

        descriptor = window[-1]
        if descriptor.type is not TokenType.IDENTIFIER or not descriptor.value:
            raise ParseError(ErrorCode.INVALID_TYPE_DESCRIPTOR, position=descriptor.position, name=name.value)
        try:
            kind = ValueKind(descriptor.value)
        except ValueError:
            raise ParseError(ErrorCode.UNKNOWN_KIND, position=descriptor.position, kind=descriptor.value) from None
        return kind, window[:-2]

    def _parse_call(self) -> FunctionCall:
        name, _ = self._expect(TokenType.IDENTIFIER, TokenType.OPEN_PAREN)

        arguments: List[Token] = []
        while True:
            token = self._peek()
            if token is None:
                raise ParseError(ErrorCode.UNEXPECTED_END, position=len(self.source), expected=str(TokenType.CLOSE_PAREN))
            self.index += 1
            if token.type is TokenType.CLOSE_PAREN:
                break
            if token.type not in ARGUMENT_TOKENS:
                raise ParseError(ErrorCode.EXPECTED_ARGUMENT, position=token.position, found=token.describe())

            arguments.append(token)
            separator = self._peek()
            if separator is not None and separator.type is TokenType.SEPARATOR:
                self.index += 1

        self._ensure_unique(name)
        return FunctionCall().set_arguments([self._argument(token) for token in arguments]).set_function_name(name.value)

    def _argument(self, token: Token) -> Operand:
        if token.type is TokenType.IDENTIFIER:
            with pointing_at(token.position):
                return VariableReference(token.value, self.program)
        return anonymous_literal(token)


def parse_tokens(tokens: List[Token], source: str) -> Program:
    """Parses a token sequence into the program tree."""
    return WiParser(tokens, source).parse()


def parse_wi(source: str) -> Program:
    """Tokenizes and parses Wi source text into the program tree."""
    return parse_tokens(tokenize(source), source)
