import json
import os
from typing import List, Optional, Sequence

from lark import Lark
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters

from ..exceptions import ErrorCode, InternalCompilerError, LexError
from ..model import operator_symbols
from .classes import Token, TokenType

try:
    from importlib.resources import files as pkg_files

    TOKEN_GRAMMAR = (pkg_files("wic.lexer") / "tokens.lark").read_text()
except (ModuleNotFoundError, FileNotFoundError):
    # Fallback for running from a source checkout
    grammar_path = os.path.join(os.path.dirname(__file__), "tokens.lark")
    with open(grammar_path, "r") as f:
        TOKEN_GRAMMAR = f.read()


TOKEN_TYPES = {
    "LPAR": TokenType.OPEN_PAREN,
    "RPAR": TokenType.CLOSE_PAREN,
    "LBRACE": TokenType.OPEN_BRACE,
    "RBRACE": TokenType.CLOSE_BRACE,
    "ASSIGN": TokenType.ASSIGNER,
    "END": TokenType.END,
    "SEPARATOR": TokenType.SEPARATOR,
    "LET": TokenType.DECLARATION,
    "AS": TokenType.TYPE_DESCRIPTOR,
    "NUMBER": TokenType.NUMERIC,
    "STRING": TokenType.STRING,
    "IDENTIFIER": TokenType.IDENTIFIER,
    # Operators piggy-back on the identifier token kind
    "OPERATOR": TokenType.IDENTIFIER,
}


def build_lexer(symbols: Optional[Sequence[str]] = None) -> Lark:
    """
    Compiles the token grammar, accepting `symbols` (by default every operator
    symbol registered by the value kinds) as single-character identifiers.
    """
    symbols = operator_symbols() if symbols is None else list(symbols)
    if not symbols:
        raise InternalCompilerError("No operator symbols are registered; the token grammar cannot be built.")

    operator_terminal = "OPERATOR: " + " | ".join(json.dumps(symbol) for symbol in symbols)
    return Lark(f"{TOKEN_GRAMMAR}\n{operator_terminal}\n", start="start", parser="lalr", lexer="basic")


WI_LEXER = build_lexer()


def _convert_token(token: LarkToken, source: str) -> Token:
    if token.type == "UNTERMINATED_STRING":
        raise LexError(ErrorCode.UNTERMINATED_STRING, position=token.start_pos)
    if token.type == "UNTERMINATED_COMMENT":
        raise LexError(ErrorCode.UNTERMINATED_COMMENT, position=token.start_pos)

    token_type = TOKEN_TYPES[token.type]
    if token_type is TokenType.NUMERIC:
        if token.end_pos >= len(source):
            raise LexError(ErrorCode.UNTERMINATED_NUMBER, position=token.start_pos)
        return Token(type=token_type, position=token.start_pos, value=token.value)
    if token_type is TokenType.STRING:
        return Token(type=token_type, position=token.start_pos, value=token.value[1:-1])
    if token_type is TokenType.IDENTIFIER:
        return Token(type=token_type, position=token.start_pos, value=token.value)
    return Token(type=token_type, position=token.start_pos)


def tokenize(source: str, lexer: Optional[Lark] = None) -> List[Token]:
    """Converts Wi source text into its token sequence."""
    lexer = lexer or WI_LEXER
    tokens = []
    try:
        for token in lexer.lex(source):
            tokens.append(_convert_token(token, source))
    except UnexpectedCharacters as e:
        raise LexError(ErrorCode.UNEXPECTED_CHARACTER, position=e.pos_in_stream, char=e.char) from e
    return tokens
