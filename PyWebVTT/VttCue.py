from __future__ import annotations
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

class VttCue:
    """
    A single timed text entry.

    Cues are immutable once constructed: the parser builds them and the compiler reads them.

    Attributes:
        identifier (str): explicit cue identifier, or the cue's 1-based block number if none was given
        start (float): start offset in seconds
        end (float): end offset in seconds
        text (str): cue body, lines joined with newlines
        styles (str): cue settings that followed the end timestamp, verbatim
        meta (Mapping[str, Any]|None): read-only metadata carried by a preceding cue metadata block
    """
    __slots__ = ('_identifier', '_start', '_end', '_text', '_styles', '_meta')

    def __init__(self, identifier : str, start : float, end : float, text : str, styles : str = "", meta : Mapping[str, Any]|None = None):
        self._identifier : str = identifier
        self._start : float = start
        self._end : float = end
        self._text : str = text
        self._styles : str = styles
        self._meta : dict[str, Any]|None = dict(meta) if meta is not None else None

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def start(self) -> float:
        return self._start

    @property
    def end(self) -> float:
        return self._end

    @property
    def duration(self) -> float:
        return self._end - self._start

    @property
    def text(self) -> str:
        return self._text

    @property
    def styles(self) -> str:
        return self._styles

    @property
    def meta(self) -> Mapping[str, Any]|None:
        return MappingProxyType(self._meta) if self._meta is not None else None

    def WithMeta(self, meta : Mapping[str, Any]|None) -> VttCue:
        """
        Return a copy of the cue with different metadata
        """
        return VttCue(self._identifier, self._start, self._end, self._text, self._styles, meta)

    def to_dict(self) -> dict[str, Any]:
        return {
            'identifier': self._identifier,
            'start': self._start,
            'end': self._end,
            'text': self._text,
            'styles': self._styles,
            'meta': dict(self._meta) if self._meta is not None else None
        }

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, VttCue):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._identifier, self._start, self._end, self._text, self._styles))

    def __repr__(self) -> str:
        return f"VttCue({self._identifier!r}, {self._start}, {self._end}, {self._text!r}, styles={self._styles!r}, meta={self._meta!r})"
