from __future__ import annotations
import logging
import math
from collections.abc import Mapping
from typing import Any

from PyWebVTT.Helpers.Localization import _
from PyWebVTT.Helpers.Time import FormatTimestamp
from PyWebVTT.MetadataCodec import ARROW_TOKEN, NOTE_TOKEN, MetadataCodec, MetadataScope, WriteMetadataBlock, default_codec
from PyWebVTT.SettingsType import BuildOptions, SettingType
from PyWebVTT.VttCue import VttCue
from PyWebVTT.VttDocument import VttDocument
from PyWebVTT.VttError import CompilerError
from PyWebVTT.VttTokenizer import SIGNATURE

def _get_field(item : Any, name : str, default : Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)

def _is_number(value : Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def _has_line_break(value : str) -> bool:
    return '\n' in value or '\r' in value

class VttCompiler:
    """
    Compiles a VttDocument back into WebVTT text.

    Plain mappings with the same fields as VttDocument and VttCue are accepted too,
    so documents that have been serialised to JSON can be compiled directly.

    Options:
        strict (bool): refuse invalid documents and cues that do not end after they start (default True)
    """
    def __init__(self, options : Mapping[str,SettingType]|None = None, codec : MetadataCodec|None = None, **overrides : SettingType):
        settings = BuildOptions(options, **overrides)
        self.strict : bool = settings.get_bool('strict', True)
        self.codec : MetadataCodec = codec or default_codec

    def compose(self, document : VttDocument|Mapping[str, Any]) -> str:
        """
        Compose a document into WebVTT text.

        Raises:
            CompilerError: If the document or any cue is malformed, or cues are not in chronological order
        """
        if document is None:
            raise CompilerError(_("Input must be non-null"))

        if isinstance(document, (list, tuple)):
            raise CompilerError(_("Input cannot be array"))

        if not isinstance(document, (VttDocument, Mapping)):
            raise CompilerError(_("Input must be an object, not {}").format(type(document).__name__))

        cues = _get_field(document, 'cues') or []
        if not isinstance(cues, (list, tuple)):
            raise CompilerError(_("Document cues must be a list"), field='cues')

        valid = _get_field(document, 'valid', not _get_field(document, 'errors'))
        if self.strict and not valid:
            raise CompilerError(_("Input must be valid"), field='valid')

        blocks = [ SIGNATURE ]

        meta = _get_field(document, 'meta')
        if meta is not None:
            blocks.append(self._compile_meta(MetadataScope.DOCUMENT, meta))

        previous_start : float|None = None
        for index, cue in enumerate(cues):
            blocks.append(self._compile_cue(cue, index))

            start = _get_field(cue, 'start')
            if previous_start is not None and previous_start > start:
                raise CompilerError(_("Cue number {index} is not in chronological order").format(index=index), index=index, field='start')
            previous_start = start

        logging.debug(f"Compiled {len(cues)} cues")
        return '\n\n'.join(blocks) + '\n'

    def _compile_meta(self, scope : MetadataScope, meta : Any, index : int|None = None) -> str:
        if not isinstance(meta, Mapping):
            if scope == MetadataScope.CUE:
                raise CompilerError(_("Cue meta malformed: not of type object (cue #{index})").format(index=index), index=index, field='meta')
            raise CompilerError(_("Meta malformed: not of type object"), field='meta')

        try:
            return WriteMetadataBlock(scope, meta, self.codec)
        except ValueError as e:
            raise CompilerError(_("Unable to encode metadata"), index=index, field='meta', error=e) from e

    def _compile_cue(self, cue : VttCue|Mapping[str, Any], index : int) -> str:
        """
        Compile a single cue, preceded by its metadata block if it has one
        """
        if not isinstance(cue, (VttCue, Mapping)):
            raise CompilerError(_("Cue malformed: not of type object (cue #{index})").format(index=index), index=index)

        identifier = _get_field(cue, 'identifier')
        start = _get_field(cue, 'start')
        end = _get_field(cue, 'end')
        text = _get_field(cue, 'text')
        styles = _get_field(cue, 'styles')
        meta = _get_field(cue, 'meta')

        if isinstance(identifier, bool) or not isinstance(identifier, (str, int, type(None))):
            raise CompilerError(_("Cue malformed: identifier value is not a string (cue #{index})").format(index=index), index=index, field='identifier')

        identifier = str(identifier) if identifier is not None else ''
        if ARROW_TOKEN in identifier or _has_line_break(identifier):
            raise CompilerError(_("Cue malformed: identifier cannot contain \"{arrow}\" or line breaks (cue #{index})").format(arrow=ARROW_TOKEN, index=index), index=index, field='identifier')

        if identifier.strip().startswith(NOTE_TOKEN):
            raise CompilerError(_("Cue malformed: identifier cannot start with \"{note}\" (cue #{index})").format(note=NOTE_TOKEN, index=index), index=index, field='identifier')

        for name, value in (('start', start), ('end', end)):
            if not _is_number(value) or math.isnan(value):
                raise CompilerError(_("Cue malformed: null {field} value (cue #{index})").format(field=name, index=index), index=index, field=name)
            if value < 0 or math.isinf(value):
                raise CompilerError(_("Cue malformed: {field} value out of range (cue #{index})").format(field=name, index=index), index=index, field=name)

        if self.strict and start >= end:
            raise CompilerError(_("Cue malformed: start timestamp greater than end (cue #{index})").format(index=index), index=index, field='end')

        if not isinstance(text, str):
            raise CompilerError(_("Cue malformed: null text value (cue #{index})").format(index=index), index=index, field='text')

        if not isinstance(styles, str):
            raise CompilerError(_("Cue malformed: null styles value (cue #{index})").format(index=index), index=index, field='styles')

        # a blank line would end the cue block early, and an arrow in the body reads as a timing line
        if '\r' in text or '\n\n' in text or text.startswith('\n') or ARROW_TOKEN in text:
            raise CompilerError(_("Cue malformed: text cannot contain blank lines or \"{arrow}\" (cue #{index})").format(arrow=ARROW_TOKEN, index=index), index=index, field='text')

        if ARROW_TOKEN in styles or _has_line_break(styles):
            raise CompilerError(_("Cue malformed: styles cannot contain \"{arrow}\" or line breaks (cue #{index})").format(arrow=ARROW_TOKEN, index=index), index=index, field='styles')

        lines = []

        if meta is not None:
            lines.append(self._compile_meta(MetadataScope.CUE, meta, index))
            lines.append('')

        if identifier:
            lines.append(identifier)

        timing = f"{FormatTimestamp(start)} {ARROW_TOKEN} {FormatTimestamp(end)}"
        if styles:
            timing += f" {styles}"

        lines.append(timing)
        lines.append(text)
        return '\n'.join(lines)
