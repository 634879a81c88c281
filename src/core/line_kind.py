from enum import Enum


class LineKind(Enum):
    """
    Classification of one raw INI line: what the parser did with it.
    """
    COMMENT = "comment"    # starts with ';', '#' or '/'
    EMPTY = "empty"        # blank after trimming
    SECTION = "section"    # [name]
    ENTRY = "entry"        # key=value
    IGNORED = "ignored"    # no '=' or nowhere to store it; silently skipped
