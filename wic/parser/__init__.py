from .core.parser import WiParser, parse_tokens, parse_wi
from .core.reduction import Irreducible, Reduced, reduce_window
