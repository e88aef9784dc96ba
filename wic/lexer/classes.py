"""
Token contracts produced by the lexer. Tokens are immutable and carry the
source offset where they begin.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenType(str, Enum):
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    OPEN_BRACE = "open_brace"
    CLOSE_BRACE = "close_brace"
    ASSIGNER = "assigner"
    END = "end"
    DECLARATION = "declaration"
    TYPE_DESCRIPTOR = "type_descriptor"
    SEPARATOR = "separator"
    IDENTIFIER = "identifier"
    NUMERIC = "numeric"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


VALUED_TOKENS = {TokenType.IDENTIFIER, TokenType.NUMERIC, TokenType.STRING}


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TokenType
    position: int
    value: Optional[str] = None

    def describe(self) -> str:
        """A short human-readable form used in error messages."""
        if self.type in VALUED_TOKENS:
            return f"{self.type.value} '{self.value}'"
        return self.type.value
