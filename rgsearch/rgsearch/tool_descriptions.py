"""Tool descriptions and input schemas — single source of truth.

Used by rgsearch-mcp/server.py (MCP transport layer) and the rgsearch CLI
`tools` verb.
"""

from typing import Any, Dict

from rgsearch.constants import Operation

# ---------------------------------------------------------------------------
# Shared field descriptions
# ---------------------------------------------------------------------------

PATTERN_DESC = "The search pattern (regex by default)"

PATH_DESC = "Directory or file(s) to search. Defaults to current directory."

CASE_SENSITIVE_DESC = "Use case sensitive search (default: auto)"

FILE_PATTERN_DESC = "Filter by file type or glob"

FILE_TYPE_DESC = "Filter by file type (e.g., js, py)"

MAX_RESULTS_DESC = "Limit the number of matching lines"

CONTEXT_DESC = "Show N lines before and after each match"

USE_COLORS_DESC = (
    "Keep terminal color codes in the output (default: false, output is "
    "plain text)"
)

# ---------------------------------------------------------------------------
# Tool descriptions
# ---------------------------------------------------------------------------

SEARCH_TOOL_DESC = "Search files for patterns using ripgrep (rg)"

ADVANCED_SEARCH_TOOL_DESC = "Advanced search with ripgrep with more options"

COUNT_MATCHES_TOOL_DESC = "Count matches in files using ripgrep"

LIST_FILES_TOOL_DESC = (
    "List files that would be searched by ripgrep without actually searching them"
)

LIST_FILE_TYPES_TOOL_DESC = "List all supported file types in ripgrep"


def _prop(type_: str, description: str) -> Dict[str, Any]:
    return {"type": type_, "description": description}


_PATTERN = _prop("string", PATTERN_DESC)
_PATH = _prop("string", PATH_DESC)
_CASE_SENSITIVE = _prop("boolean", CASE_SENSITIVE_DESC)
_FILE_PATTERN = _prop("string", FILE_PATTERN_DESC)
_FILE_TYPE = _prop("string", FILE_TYPE_DESC)
_MAX_RESULTS = _prop("number", MAX_RESULTS_DESC)
_CONTEXT = _prop("number", CONTEXT_DESC)
_USE_COLORS = _prop("boolean", USE_COLORS_DESC)


SEARCH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "pattern": _PATTERN,
        "path": _PATH,
        "caseSensitive": _CASE_SENSITIVE,
        "filePattern": _FILE_PATTERN,
        "maxResults": _MAX_RESULTS,
        "context": _CONTEXT,
        "useColors": _USE_COLORS,
    },
    "required": ["pattern"],
}

ADVANCED_SEARCH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "pattern": _PATTERN,
        "path": _PATH,
        "caseSensitive": _CASE_SENSITIVE,
        "fixedStrings": _prop(
            "boolean", "Treat pattern as a literal string, not a regex"
        ),
        "filePattern": _FILE_PATTERN,
        "fileType": _FILE_TYPE,
        "maxResults": _MAX_RESULTS,
        "context": _CONTEXT,
        "invertMatch": _prop("boolean", "Show lines that don't match the pattern"),
        "wordMatch": _prop(
            "boolean", "Only show matches surrounded by word boundaries"
        ),
        "includeHidden": _prop(
            "boolean", "Search in hidden files and directories"
        ),
        "followSymlinks": _prop("boolean", "Follow symbolic links"),
        "showFilenamesOnly": _prop(
            "boolean", "Only show filenames of matches, not content"
        ),
        "showLineNumbers": _prop("boolean", "Show line numbers (default: true)"),
        "useColors": _USE_COLORS,
    },
    "required": ["pattern"],
}

COUNT_MATCHES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "pattern": _PATTERN,
        "path": _PATH,
        "caseSensitive": _CASE_SENSITIVE,
        "filePattern": _FILE_PATTERN,
        "countLines": _prop(
            "boolean",
            "Count matching lines instead of total matches (default: true)",
        ),
        "useColors": _USE_COLORS,
    },
    "required": ["pattern"],
}

LIST_FILES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": _PATH,
        "filePattern": _FILE_PATTERN,
        "fileType": _FILE_TYPE,
        "includeHidden": _prop("boolean", "Include hidden files and directories"),
    },
}

LIST_FILE_TYPES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {},
}


TOOL_DESCRIPTIONS: Dict[str, str] = {
    Operation.SEARCH: SEARCH_TOOL_DESC,
    Operation.ADVANCED_SEARCH: ADVANCED_SEARCH_TOOL_DESC,
    Operation.COUNT_MATCHES: COUNT_MATCHES_TOOL_DESC,
    Operation.LIST_FILES: LIST_FILES_TOOL_DESC,
    Operation.LIST_FILE_TYPES: LIST_FILE_TYPES_TOOL_DESC,
}

TOOL_SCHEMAS: Dict[str, Dict[str, Any]] = {
    Operation.SEARCH: SEARCH_SCHEMA,
    Operation.ADVANCED_SEARCH: ADVANCED_SEARCH_SCHEMA,
    Operation.COUNT_MATCHES: COUNT_MATCHES_SCHEMA,
    Operation.LIST_FILES: LIST_FILES_SCHEMA,
    Operation.LIST_FILE_TYPES: LIST_FILE_TYPES_SCHEMA,
}
