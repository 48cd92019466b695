# ═════════════════════════════════════════════════════════════════════════════════
# PERSON NAME GRAMMAR
# ═════════════════════════════════════════════════════════════════════════════════
#
# Canonical form: "Family, Given [Middle...]"
#
# 1. WORD: an uppercase ASCII letter followed by one or more letters,
#    apostrophes or hyphens ("Lee", "O'Neil", "Smith-Jones")
# 2. FAMILY / GIVEN: one word, then zero or more further words separated by
#    exactly one space ("Van Der Berg", "John Michael")
# 3. NAME: FAMILY, a comma, at most one space, GIVEN
#
# The repeated word group is "zero or more"; an optional-and-repeated
# quantifier on it would be redundant.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

WORD_PATTERN = r"[A-Z][A-Za-z'-]+"

WORD_SEPARATOR = " "

NAME_SEPARATOR = ","

# Family segment and given segment share the same shape
SEGMENT_PATTERN = rf"{WORD_PATTERN}(?:{WORD_SEPARATOR}{WORD_PATTERN})*"

# Full name, to be used with re.fullmatch (no trailing newline is tolerated)
NAME_PATTERN = rf"{SEGMENT_PATTERN}{NAME_SEPARATOR}{WORD_SEPARATOR}?{SEGMENT_PATTERN}"


# ═════════════════════════════════════════════════════════════════════════════════
# BINARY FRAMING
# ═════════════════════════════════════════════════════════════════════════════════

# Signed 32-bit network-order length, followed by the UTF-8 canonical text
LENGTH_PREFIX_FORMAT = ">i"

TEXT_ENCODING = "utf-8"


# ═════════════════════════════════════════════════════════════════════════════════
# REJECTION REASONS
# ═════════════════════════════════════════════════════════════════════════════════

REJECTION_REASONS = MappingProxyType(
    {
        "not_text": "input is not a string",
        "empty": "input is empty",
        "no_separator": "missing ',' between family and given name",
        "grammar": "does not match 'Family, Given [Middle...]'",
        "truncated_prefix": "binary value is shorter than its length prefix",
        "bad_length": "binary length prefix is negative or exceeds the buffer",
        "bad_encoding": "binary value is not valid UTF-8",
        "trailing_bytes": "binary value has trailing bytes after the name",
    }
)


# ═════════════════════════════════════════════════════════════════════════════════
# HOST FUNCTION NAMES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Stable names under which the boundary functions are published in FUNCTIONS.
# Ordering predicates come first, matching the usual operator-class layout.

ORDERING_FUNCTION_NAMES = ("lt", "le", "eq", "ge", "gt", "ne")

IO_FUNCTION_NAMES = ("in", "out", "recv", "send")

ACCESSOR_FUNCTION_NAMES = ("family", "given", "display")
