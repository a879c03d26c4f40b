"""rgsearch constants

Operation names, ripgrep flags, and the placeholder texts returned when a
call produces no output.
"""

DEFAULT_PROGRAM = "rg"
DEFAULT_PATH = "."

SERVER_NAME = "ripgrep-search"


class Operation:
    """Operation name constants."""

    SEARCH = "search"
    ADVANCED_SEARCH = "advanced-search"
    COUNT_MATCHES = "count-matches"
    LIST_FILES = "list-files"
    LIST_FILE_TYPES = "list-file-types"

    ALL = [SEARCH, ADVANCED_SEARCH, COUNT_MATCHES, LIST_FILES, LIST_FILE_TYPES]


class Flag:
    """ripgrep command-line flags."""

    CASE_SENSITIVE = "-s"
    IGNORE_CASE = "-i"
    FIXED_STRINGS = "-F"
    GLOB = "-g"
    TYPE = "-t"
    MAX_COUNT = "-m"
    CONTEXT = "-C"
    INVERT_MATCH = "-v"
    WORD_REGEXP = "-w"
    HIDDEN = "-."
    FOLLOW = "-L"
    FILES_WITH_MATCHES = "-l"
    LINE_NUMBER = "-n"
    NO_LINE_NUMBER = "-N"
    COUNT = "-c"
    COUNT_MATCHES = "--count-matches"
    COLOR = "--color"
    FILES = "--files"
    TYPE_LIST = "--type-list"
    END_OF_OPTIONS = "--"


class ColorMode:
    ALWAYS = "always"
    NEVER = "never"


class Placeholder:
    """Text returned in place of empty output."""

    NO_MATCHES = "No matches found."
    NO_FILES = "No files found."
    NO_FILE_TYPES = "Failed to get file types."

    BY_OPERATION = {
        Operation.SEARCH: NO_MATCHES,
        Operation.ADVANCED_SEARCH: NO_MATCHES,
        Operation.COUNT_MATCHES: NO_MATCHES,
        Operation.LIST_FILES: NO_FILES,
        Operation.LIST_FILE_TYPES: NO_FILE_TYPES,
    }
