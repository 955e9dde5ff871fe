"""
Metadata carried inside NOTE blocks.

WebVTT readers ignore NOTE blocks, so structured data can travel with a document by writing
a NOTE whose first line holds a sentinel followed by an encoded payload:

    NOTE MCONF_META {"lang": "en"}

    NOTE MCONF_CUE_META {"speaker": "Alice"}

    00:00:01.000 --> 00:00:02.000
    Hello

MCONF_META blocks apply to the whole document, MCONF_CUE_META blocks to the next cue.
The payload encoding is pluggable through MetadataCodec; JSON is the default.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from PyWebVTT.Helpers.Localization import _

NOTE_TOKEN = 'NOTE'
ARROW_TOKEN = '-->'

class MetadataScope(Enum):
    DOCUMENT = 'MCONF_META'
    CUE = 'MCONF_CUE_META'

    @property
    def sentinel(self) -> str:
        return self.value

class MetadataCodec(ABC):
    """
    Converts a metadata mapping to and from the payload text that follows a sentinel.
    """
    @abstractmethod
    def encode(self, meta : Mapping[str, Any]) -> str:
        """
        Encode a mapping as a single line of text that does not contain the cue arrow.

        Raises:
            ValueError: If the mapping cannot be encoded
        """
        pass

    @abstractmethod
    def decode(self, payload : str) -> dict[str, Any]:
        """
        Decode payload text back into a mapping.

        Raises:
            ValueError: If the payload is malformed or does not describe a mapping
        """
        pass

class JsonMetadataCodec(MetadataCodec):
    """
    Encodes metadata as a JSON object.
    """
    def encode(self, meta : Mapping[str, Any]) -> str:
        try:
            payload = json.dumps(dict(meta), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ValueError(_("Metadata cannot be encoded as JSON: {}").format(str(e))) from e

        # '>' can only appear inside a JSON string, so the escaped form decodes to the same value
        return payload.replace(ARROW_TOKEN, '--\\u003e')

    def decode(self, payload : str) -> dict[str, Any]:
        try:
            meta = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ValueError(_("Malformed metadata payload: {}").format(str(e))) from e

        if not isinstance(meta, dict):
            raise ValueError(_("Metadata payload must be an object, not {}").format(type(meta).__name__))

        return meta

default_codec : MetadataCodec = JsonMetadataCodec()

def FindMetadataSentinel(line : str) -> tuple[MetadataScope, int]|None:
    """
    Find the earliest metadata sentinel in a NOTE line, returning its scope and position
    """
    found = [ (line.find(scope.sentinel), scope) for scope in MetadataScope ]
    found = [ (position, scope) for position, scope in found if position >= 0 ]
    if not found:
        return None

    position, scope = min(found, key=lambda item: item[0])
    return scope, position

def IsNoteBlock(lines : list[str]) -> bool:
    return len(lines) > 0 and lines[0].strip().startswith(NOTE_TOKEN)

def ReadMetadataBlock(lines : list[str], codec : MetadataCodec|None = None) -> tuple[MetadataScope, dict[str, Any]]|None:
    """
    Decode a metadata block.

    lines should already have empty lines removed. Returns None if the block is not a metadata block.

    Raises:
        ValueError: If the block has a sentinel but the payload cannot be decoded
    """
    if not IsNoteBlock(lines):
        return None

    first_line = lines[0]
    sentinel = FindMetadataSentinel(first_line)
    if sentinel is None:
        return None

    scope, position = sentinel
    payload = first_line[position + len(scope.sentinel):]
    codec = codec or default_codec
    return scope, codec.decode(payload)

def WriteMetadataBlock(scope : MetadataScope, meta : Mapping[str, Any], codec : MetadataCodec|None = None) -> str:
    """
    Encode metadata as a single-line NOTE block.

    Raises:
        ValueError: If the metadata cannot be encoded on one line
    """
    codec = codec or default_codec
    payload = codec.encode(meta)
    if '\n' in payload or '\r' in payload:
        raise ValueError(_("Encoded metadata must fit on a single line"))

    block = f"{NOTE_TOKEN} {scope.sentinel} {payload}"
    return block.replace(ARROW_TOKEN, '')

def MergeMetadata(existing : Mapping[str, Any]|None, update : Mapping[str, Any]|None) -> dict[str, Any]|None:
    """
    Shallow merge, keys in update replace keys in existing
    """
    if existing is None:
        return dict(update) if update is not None else None

    merged = dict(existing)
    if update:
        merged.update(update)
    return merged
