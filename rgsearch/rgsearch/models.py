"""Pydantic models for ripgrep operation requests.

Inbound arguments arrive as a loosely typed JSON object with camelCase keys.
Each request model validates and defaults them once; everything after that
works with plain typed, immutable fields.

Argument rules:
- pattern: required, non-empty string
- path: defaults to "." when absent or null; never empty
- booleans must be JSON booleans; null means absent
- maxResults / context: non-negative integers, 0 means unset
- filePattern / fileType: empty string means absent
- strings must be passable to a process (no NUL, valid UTF-8)
"""

import logging
from typing import Any, ClassVar, Dict, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from rgkit.primitives.errors import UnknownOperationError, ValidationError
from rgsearch.constants import DEFAULT_PATH, Operation

logger = logging.getLogger(__name__)

FILE_TYPE_PATTERN = r"^[A-Za-z0-9_+-]+$"

# pydantic error types that mean "no usable pattern was given"
_MISSING_PATTERN_ERRORS = {"missing", "string_type", "string_too_short"}


def check_process_arg(value: Optional[str]) -> Optional[str]:
    """Reject strings that cannot become a command-line argument."""
    if value is None:
        return value
    if "\x00" in value:
        raise ValueError("must not contain NUL characters")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError("must be valid UTF-8 text") from e
    return value


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    operation: ClassVar[str]

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """A null argument behaves exactly like an absent one."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class _PathMixin(BaseModel):
    path: StrictStr = Field(default=DEFAULT_PATH, min_length=1)

    @field_validator("path")
    @classmethod
    def path_is_passable(cls, value: str) -> str:
        return check_process_arg(value)


class _FilterMixin(BaseModel):
    file_pattern: Optional[StrictStr] = Field(default=None, alias="filePattern")

    @field_validator("file_pattern", mode="before")
    @classmethod
    def empty_pattern_is_absent(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("file_pattern")
    @classmethod
    def file_pattern_is_passable(cls, value: Optional[str]) -> Optional[str]:
        return check_process_arg(value)


class _FileTypeMixin(BaseModel):
    file_type: Optional[StrictStr] = Field(
        default=None, alias="fileType", pattern=FILE_TYPE_PATTERN
    )

    @field_validator("file_type", mode="before")
    @classmethod
    def empty_type_is_absent(cls, value: Any) -> Any:
        return None if value == "" else value


class _PatternMixin(BaseModel):
    pattern: StrictStr = Field(..., min_length=1)
    case_sensitive: Optional[StrictBool] = Field(default=None, alias="caseSensitive")
    use_colors: StrictBool = Field(default=False, alias="useColors")

    @field_validator("pattern")
    @classmethod
    def pattern_is_passable(cls, value: str) -> str:
        return check_process_arg(value)


class _LimitMixin(BaseModel):
    max_results: Optional[int] = Field(default=None, alias="maxResults", ge=0)
    context: Optional[int] = Field(default=None, ge=0)

    @field_validator("max_results", "context", mode="before")
    @classmethod
    def reject_non_numbers(cls, value: Any) -> Any:
        # bool is an int subclass and lax mode would parse numeric strings
        if isinstance(value, (bool, str)):
            raise ValueError("must be an integer")
        return value

    @field_validator("max_results", "context")
    @classmethod
    def zero_is_unset(cls, value: Optional[int]) -> Optional[int]:
        return value or None


# Request Models


class SearchRequest(_Request, _PatternMixin, _PathMixin, _FilterMixin, _LimitMixin):
    """Basic search: pattern, path, glob, limits."""

    operation: ClassVar[str] = Operation.SEARCH


class AdvancedSearchRequest(
    _Request, _PatternMixin, _PathMixin, _FilterMixin, _FileTypeMixin, _LimitMixin
):
    """Search with the full set of ripgrep toggles.

    show_line_numbers is tri-state: None behaves like True.
    """

    operation: ClassVar[str] = Operation.ADVANCED_SEARCH

    fixed_strings: StrictBool = Field(default=False, alias="fixedStrings")
    invert_match: StrictBool = Field(default=False, alias="invertMatch")
    word_match: StrictBool = Field(default=False, alias="wordMatch")
    include_hidden: StrictBool = Field(default=False, alias="includeHidden")
    follow_symlinks: StrictBool = Field(default=False, alias="followSymlinks")
    show_filenames_only: StrictBool = Field(default=False, alias="showFilenamesOnly")
    show_line_numbers: Optional[StrictBool] = Field(
        default=None, alias="showLineNumbers"
    )


class CountMatchesRequest(_Request, _PatternMixin, _PathMixin, _FilterMixin):
    operation: ClassVar[str] = Operation.COUNT_MATCHES

    count_lines: StrictBool = Field(default=True, alias="countLines")


class ListFilesRequest(_Request, _PathMixin, _FilterMixin, _FileTypeMixin):
    operation: ClassVar[str] = Operation.LIST_FILES
    use_colors: ClassVar[bool] = False

    include_hidden: StrictBool = Field(default=False, alias="includeHidden")


class ListFileTypesRequest(_Request):
    operation: ClassVar[str] = Operation.LIST_FILE_TYPES
    use_colors: ClassVar[bool] = False


OperationRequest = Union[
    SearchRequest,
    AdvancedSearchRequest,
    CountMatchesRequest,
    ListFilesRequest,
    ListFileTypesRequest,
]

REQUEST_TYPES: Dict[str, Type[_Request]] = {
    Operation.SEARCH: SearchRequest,
    Operation.ADVANCED_SEARCH: AdvancedSearchRequest,
    Operation.COUNT_MATCHES: CountMatchesRequest,
    Operation.LIST_FILES: ListFilesRequest,
    Operation.LIST_FILE_TYPES: ListFileTypesRequest,
}


def _argument_names(request_type: Type[_Request]) -> set:
    return {
        field.alias or name for name, field in request_type.model_fields.items()
    }


def _to_validation_error(error: PydanticValidationError) -> ValidationError:
    """Collapse pydantic's error list into our single ValidationError."""
    first = error.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else "arguments"
    value = first.get("input")

    if field == "pattern" and first["type"] in _MISSING_PATTERN_ERRORS:
        return ValidationError("pattern", "Pattern is required", value)

    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return ValidationError(field, message, value)


def parse_request(
    operation: str, arguments: Optional[Dict[str, Any]] = None
) -> OperationRequest:
    """Build the typed request for an operation.

    Raises:
        UnknownOperationError: operation is not one of Operation.ALL.
        ValidationError: an argument is missing or malformed.
    """
    request_type = REQUEST_TYPES.get(operation)
    if request_type is None:
        raise UnknownOperationError(operation)

    arguments = arguments or {}
    extra = sorted(set(arguments) - _argument_names(request_type))
    if extra:
        logger.debug(f"Ignoring unknown arguments for {operation}: {extra}")

    try:
        return request_type.model_validate(arguments)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e
