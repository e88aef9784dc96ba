"""
Utility helpers for the Wi compiler: terminal colouring and the JSON
serializer used for debug artifacts.
"""

import json
from enum import Enum

from lark import Token
from pydantic import BaseModel


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    RESET = "\033[0m"


class CompilerArtifactEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, BaseModel):
            return o.model_dump(mode="json", exclude_none=True)
        if hasattr(o, "to_dict"):
            return o.to_dict()
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, Token):
            return o.value
        if isinstance(o, set):
            return list(o)
        return super().default(o)
