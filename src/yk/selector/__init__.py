"""yk selector protocol and process driver."""

from yk.selector.codec import (
    DELIMITER,
    DelimiterCollisionError,
    SelectorFormatError,
    SelectorParseError,
    SelectorProtocolError,
    SelectorRangeError,
    decode_reply,
    encode_catalog,
    encode_entry,
)
from yk.selector.process import SelectorNotFoundError, SelectorReply, run_selector, selector_args

__all__ = [
    "DELIMITER",
    "DelimiterCollisionError",
    "SelectorFormatError",
    "SelectorNotFoundError",
    "SelectorParseError",
    "SelectorProtocolError",
    "SelectorRangeError",
    "SelectorReply",
    "decode_reply",
    "encode_catalog",
    "encode_entry",
    "run_selector",
    "selector_args",
]
