"""Command builder: typed request -> ripgrep CommandSpec.

Pure functions of their input. Flag order is fixed per operation:

    case -> literal mode -> filters -> limits -> context
         -> behavioral toggles -> display toggles -> color -> positionals

Positionals follow a "--" so a pattern beginning with "-" is never read as
a flag.
"""

from typing import List, Optional

from rgkit.primitives.shell import CommandSpec
from rgsearch.constants import DEFAULT_PROGRAM, ColorMode, Flag
from rgsearch.models import (
    AdvancedSearchRequest,
    CountMatchesRequest,
    ListFilesRequest,
    ListFileTypesRequest,
    OperationRequest,
    SearchRequest,
)


def _case_flags(case_sensitive: Optional[bool]) -> List[str]:
    # None leaves ripgrep's own case behavior in effect
    if case_sensitive is True:
        return [Flag.CASE_SENSITIVE]
    if case_sensitive is False:
        return [Flag.IGNORE_CASE]
    return []


def _filter_flags(
    file_pattern: Optional[str] = None, file_type: Optional[str] = None
) -> List[str]:
    args: List[str] = []
    if file_pattern:
        args.extend([Flag.GLOB, file_pattern])
    if file_type:
        args.extend([Flag.TYPE, file_type])
    return args


def _limit_flags(max_results: Optional[int], context: Optional[int]) -> List[str]:
    args: List[str] = []
    if max_results is not None and max_results > 0:
        args.extend([Flag.MAX_COUNT, str(max_results)])
    if context is not None and context > 0:
        args.extend([Flag.CONTEXT, str(context)])
    return args


def _color_flags(use_colors: bool) -> List[str]:
    return [Flag.COLOR, ColorMode.ALWAYS if use_colors else ColorMode.NEVER]


class CommandBuilder:
    """Builds ripgrep invocations for each operation."""

    def __init__(self, program: str = DEFAULT_PROGRAM):
        self.program = program

    def _spec(self, args: List[str]) -> CommandSpec:
        return CommandSpec(program=self.program, args=tuple(args))

    def search(self, request: SearchRequest) -> CommandSpec:
        args = _case_flags(request.case_sensitive)
        args += _filter_flags(request.file_pattern)
        args += _limit_flags(request.max_results, request.context)
        args.append(Flag.LINE_NUMBER)
        args += _color_flags(request.use_colors)
        args += [Flag.END_OF_OPTIONS, request.pattern, request.path]
        return self._spec(args)

    def advanced_search(self, request: AdvancedSearchRequest) -> CommandSpec:
        args = _case_flags(request.case_sensitive)
        if request.fixed_strings:
            args.append(Flag.FIXED_STRINGS)
        args += _filter_flags(request.file_pattern, request.file_type)
        args += _limit_flags(request.max_results, request.context)

        if request.invert_match:
            args.append(Flag.INVERT_MATCH)
        if request.word_match:
            args.append(Flag.WORD_REGEXP)
        if request.include_hidden:
            args.append(Flag.HIDDEN)
        if request.follow_symlinks:
            args.append(Flag.FOLLOW)

        if request.show_filenames_only:
            args.append(Flag.FILES_WITH_MATCHES)
        # Line numbers default on; only an explicit False turns them off
        if request.show_line_numbers is False:
            args.append(Flag.NO_LINE_NUMBER)
        else:
            args.append(Flag.LINE_NUMBER)

        args += _color_flags(request.use_colors)
        args += [Flag.END_OF_OPTIONS, request.pattern, request.path]
        return self._spec(args)

    def count_matches(self, request: CountMatchesRequest) -> CommandSpec:
        args = _case_flags(request.case_sensitive)
        args += _filter_flags(request.file_pattern)
        args.append(Flag.COUNT if request.count_lines else Flag.COUNT_MATCHES)
        args += _color_flags(request.use_colors)
        args += [Flag.END_OF_OPTIONS, request.pattern, request.path]
        return self._spec(args)

    def list_files(self, request: ListFilesRequest) -> CommandSpec:
        args = [Flag.FILES]
        args += _filter_flags(request.file_pattern, request.file_type)
        if request.include_hidden:
            args.append(Flag.HIDDEN)
        args += _color_flags(False)
        args += [Flag.END_OF_OPTIONS, request.path]
        return self._spec(args)

    def list_file_types(self, request: Optional[ListFileTypesRequest] = None) -> CommandSpec:
        return self._spec([Flag.TYPE_LIST, *_color_flags(False)])

    def build(self, request: OperationRequest) -> CommandSpec:
        """Dispatch on request type."""
        if isinstance(request, SearchRequest):
            return self.search(request)
        if isinstance(request, AdvancedSearchRequest):
            return self.advanced_search(request)
        if isinstance(request, CountMatchesRequest):
            return self.count_matches(request)
        if isinstance(request, ListFilesRequest):
            return self.list_files(request)
        if isinstance(request, ListFileTypesRequest):
            return self.list_file_types(request)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
