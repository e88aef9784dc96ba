"""
Static configuration data for the Wi compiler front end.
This includes the operator table, reserved words, per-kind value bounds and
the well-known debug dump locations.
"""

# Literal syntax symbol -> action name. Value kinds look up the symbol for
# their actions here when they register, and the lexer accepts exactly the
# symbols that ended up registered.
OPERATOR_ACTION_MAP = {"+": "add", "-": "subtract", "*": "multiply", "/": "divide", ".": "get"}

KEYWORDS = {"let": "declaration", "as": "type_descriptor"}
STRUCTURAL_SYMBOLS = ("(", ")", "{", "}", "=", ";", ",")

INTEGER_BOUNDS = {
    "i8": (-128, 127),
    "i16": (-32768, 32767),
    "i32": (-2147483648, 2147483647),
    "i64": (-9223372036854775808, 9223372036854775807),
    "u8": (0, 255),
    "u16": (0, 65535),
    "u32": (0, 4294967295),
    "u64": (0, 18446744073709551615),
}

FLOAT_BOUNDS = {
    "f32": (-3.4028234663852886e38, 3.4028234663852886e38),
    "f64": (-1.7976931348623157e308, 1.7976931348623157e308),
}

DEFAULT_INTEGER_KIND = "i64"
DEFAULT_FLOAT_KIND = "f64"

# Name given to literal operands and reduction results.
ANONYMOUS_NAME = "Anonymous"

DUMP_FILES = {"tokens": ".tokens.json", "tree": ".tree.json"}
