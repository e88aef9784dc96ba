from .classes import Token, TokenType
from .lexer import build_lexer, tokenize
