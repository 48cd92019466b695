from pname.person_names import (
    FUNCTIONS,
    GrammarInconsistencyError,
    InvalidFormat,
    ParseResult,
    PersonName,
    PersonNameCodec,
    PersonNameConfig,
    PersonNameParser,
    PersonNameValidator,
    compare,
    display,
    eq,
    family,
    from_binary,
    from_text,
    ge,
    given,
    gt,
    is_valid,
    le,
    lt,
    middle,
    ne,
    parse,
    read_binary,
    same_text,
    sort_key,
    sorted_names,
    to_binary,
    to_text,
    try_parse,
    validate,
)

__all__ = [
    "FUNCTIONS",
    "GrammarInconsistencyError",
    "InvalidFormat",
    "ParseResult",
    "PersonName",
    "PersonNameCodec",
    "PersonNameConfig",
    "PersonNameParser",
    "PersonNameValidator",
    "compare",
    "display",
    "eq",
    "family",
    "from_binary",
    "from_text",
    "ge",
    "given",
    "gt",
    "is_valid",
    "le",
    "lt",
    "middle",
    "ne",
    "parse",
    "read_binary",
    "same_text",
    "sort_key",
    "sorted_names",
    "to_binary",
    "to_text",
    "try_parse",
    "validate",
]
