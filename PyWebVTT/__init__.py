"""
PyWebVTT - WebVTT parser and compiler

Parses WebVTT subtitle documents into cues and compiles them back into text,
carrying document and cue metadata through NOTE blocks.

Basic Usage
-----------

# Parse a document, raising on the first malformed cue
document = parse(content)

# Parse leniently, collecting cue errors instead of raising
document = parse(content, strict=False)
for error in document.errors:
    print(error.index, error.message)

# Compile the document back into text
text = compile(document)
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from PyWebVTT.MetadataCodec import JsonMetadataCodec, MetadataCodec, MetadataScope
from PyWebVTT.SettingsType import SettingsError, SettingsType, SettingType
from PyWebVTT.VttCompiler import VttCompiler
from PyWebVTT.VttCue import VttCue
from PyWebVTT.VttDocument import VttDocument
from PyWebVTT.VttError import CompilerError, CueError, StructuralError, VttError
from PyWebVTT.VttParser import VttParser
from PyWebVTT.version import __version__


def parse(content : str, options : Mapping[str,SettingType]|None = None, *, strict : bool|None = None, meta : bool|None = None, codec : MetadataCodec|None = None) -> VttDocument:
    """
    Parse WebVTT text into a :class:`VttDocument`.

    Parameters
    ----------
    content : str
        The document text.

    options : Mapping, optional
        ``strict`` (default True) raises the first cue error instead of collecting it.
        ``meta`` (default False) reads ``key: value`` lines after the signature as document metadata.

    strict, meta : bool, optional
        Override the corresponding option.

    codec : MetadataCodec, optional
        Decoder for metadata blocks, JSON by default.

    Raises
    ------
    StructuralError
        If the signature or header is malformed.
    CueError
        If a cue is malformed and the parse is strict.
    """
    parser = VttParser(options, codec=codec, strict=strict, meta=meta)
    return parser.parse_string(content)

def compile(document : VttDocument|Mapping[str, Any], options : Mapping[str,SettingType]|None = None, *, strict : bool|None = None, codec : MetadataCodec|None = None) -> str:
    """
    Compile a :class:`VttDocument` (or an equivalent mapping) into WebVTT text.

    Raises
    ------
    CompilerError
        If the document or a cue is malformed, or the cues are not in chronological order.
    """
    compiler = VttCompiler(options, codec=codec, strict=strict)
    return compiler.compose(document)

__all__ = [
    '__version__',
    'parse',
    'compile',
    'VttParser',
    'VttCompiler',
    'VttDocument',
    'VttCue',
    'VttError',
    'StructuralError',
    'CueError',
    'CompilerError',
    'MetadataCodec',
    'JsonMetadataCodec',
    'MetadataScope',
    'SettingsType',
    'SettingsError',
]
