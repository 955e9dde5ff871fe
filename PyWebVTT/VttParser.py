from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any

import regex

from PyWebVTT.Helpers import FormatErrorMessages
from PyWebVTT.Helpers.Localization import _
from PyWebVTT.Helpers.Time import IsValidTimestamp, ParseTimestamp, SplitLeadingTimestamp
from PyWebVTT.MetadataCodec import (
    ARROW_TOKEN,
    MetadataCodec,
    MetadataScope,
    IsNoteBlock,
    MergeMetadata,
    ReadMetadataBlock,
    default_codec,
)
from PyWebVTT.SettingsType import BuildOptions, SettingType
from PyWebVTT.VttCue import VttCue
from PyWebVTT.VttDocument import VttDocument
from PyWebVTT.VttError import CueError, StructuralError
from PyWebVTT.VttTokenizer import SplitBlocks, SplitLines, ValidateHeader

_TIMING_SEPARATOR = regex.compile(r'[ \t]+' + regex.escape(ARROW_TOKEN) + r'[ \t]+')

class _ParseState:
    """
    Accumulator threaded through the blocks of a single parse
    """
    def __init__(self, document_meta : dict[str, Any]|None = None):
        self.cues : list[VttCue] = []
        self.errors : list[CueError] = []
        self.document_meta : dict[str, Any]|None = document_meta
        self.pending_cue_meta : dict[str, Any]|None = None

class VttParser:
    """
    Parses WebVTT text into a VttDocument.

    Options:
        strict (bool): raise the first cue error instead of collecting it (default True)
        meta (bool): read "key: value" lines after the signature as document metadata (default False)

    Document metadata is also read from MCONF_META blocks in either mode,
    and MCONF_CUE_META blocks are attached to the cue that follows them.
    """
    def __init__(self, options : Mapping[str,SettingType]|None = None, codec : MetadataCodec|None = None, **overrides : SettingType):
        settings = BuildOptions(options, **overrides)
        self.strict : bool = settings.get_bool('strict', True)
        self.read_meta : bool = settings.get_bool('meta', False)
        self.codec : MetadataCodec = codec or default_codec

    def parse_string(self, content : str) -> VttDocument:
        """
        Parse a WebVTT document.

        Raises:
            StructuralError: If the header is malformed, in either mode
            CueError: On the first malformed cue block, in strict mode
        """
        if not isinstance(content, str):
            raise StructuralError(_("Input must be a string"))

        header, *blocks = SplitBlocks(content)
        header_meta = ValidateHeader(header, self.read_meta)

        if not blocks and '\n' not in header:
            return VttDocument(strict=self.strict)

        state = _ParseState(header_meta)
        for index, block in enumerate(blocks):
            state = self._fold_block(state, index, block)

        if state.pending_cue_meta is not None:
            logging.warning(_("Cue metadata at the end of the document was not followed by a cue and has been dropped"))

        if state.errors:
            logging.info(_("Parsed {count} cues with {errors} errors: {messages}").format(
                count=len(state.cues), errors=len(state.errors), messages=FormatErrorMessages(state.errors)))

        return VttDocument(cues=state.cues, errors=state.errors, meta=state.document_meta, strict=self.strict)

    def _fold_block(self, state : _ParseState, index : int, block : str) -> _ParseState:
        lines = SplitLines(block)
        if not any(line.strip() for line in lines):
            return state

        try:
            metadata = ReadMetadataBlock(lines, self.codec)
        except ValueError as e:
            error = CueError(_("Invalid metadata block (cue #{index})").format(index=index), index, e)
            return self._record_error(state, error)

        if metadata is not None:
            scope, meta = metadata
            if scope == MetadataScope.DOCUMENT:
                state.document_meta = MergeMetadata(state.document_meta, meta)
            else:
                if state.pending_cue_meta is not None:
                    logging.debug(f"Merging consecutive cue metadata blocks (cue #{index})")
                state.pending_cue_meta = MergeMetadata(state.pending_cue_meta, meta)
            return state

        if IsNoteBlock(lines):
            logging.debug(f"Skipping NOTE block (cue #{index})")
            return state

        try:
            cue = self._parse_cue(lines, index)
        except CueError as error:
            return self._record_error(state, error)

        if cue is None:
            logging.debug(f"Dropping cue with no text (cue #{index})")
            return state

        if state.pending_cue_meta is not None:
            cue = cue.WithMeta(state.pending_cue_meta)
            state.pending_cue_meta = None

        state.cues.append(cue)
        return state

    def _record_error(self, state : _ParseState, error : CueError) -> _ParseState:
        if self.strict:
            raise error

        logging.warning(str(error))
        state.errors.append(error)
        return state

    def _parse_cue(self, lines : list[str], index : int) -> VttCue|None:
        """
        Parse an (optional) identifier line, a timing line and the cue text.
        Returns None if the cue has no text.
        """
        if len(lines) == 1 and ARROW_TOKEN not in lines[0]:
            raise CueError(_("Cue identifier cannot be standalone (cue #{index})").format(index=index), index)

        if len(lines) > 1 and ARROW_TOKEN not in lines[0] and ARROW_TOKEN not in lines[1]:
            raise CueError(_("Cue identifier needs to be followed by timestamp (cue #{index})").format(index=index), index)

        if len(lines) > 1 and ARROW_TOKEN in lines[1]:
            identifier, *lines = lines
        else:
            identifier = str(index + 1)

        timing, *text_lines = lines
        fields = _TIMING_SEPARATOR.split(timing)
        end_and_styles = SplitLeadingTimestamp(fields[1]) if len(fields) == 2 else None

        if end_and_styles is None or not IsValidTimestamp(fields[0]):
            raise CueError(_("Invalid cue timestamp (cue #{index})").format(index=index), index)

        start = ParseTimestamp(fields[0])
        end, styles = end_and_styles

        if self.strict:
            if start > end:
                raise CueError(_("Start timestamp greater than end (cue #{index})").format(index=index), index)

            if end <= start:
                raise CueError(_("End must be greater than start (cue #{index})").format(index=index), index)

        elif end < start:
            raise CueError(_("End must be greater or equal to start when not strict (cue #{index})").format(index=index), index)

        text = '\n'.join(text_lines)
        if not text:
            return None

        return VttCue(identifier, start, end, text, styles)
