from __future__ import annotations
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from PyWebVTT.VttCue import VttCue
from PyWebVTT.VttError import CueError

class VttDocument:
    """
    Result of parsing a WebVTT document, and input to the compiler.

    Attributes:
        valid (bool): True if no cue errors were recorded
        strict (bool): whether the document was parsed in strict mode
        cues (tuple[VttCue, ...]): cues in document order
        errors (tuple[CueError, ...]): cue errors collected in lenient mode
        meta (Mapping[str, Any]|None): read-only document metadata, or None if there was none
    """
    __slots__ = ('_strict', '_cues', '_errors', '_meta')

    def __init__(self, cues : Iterable[VttCue]|None = None, errors : Iterable[CueError]|None = None, meta : Mapping[str, Any]|None = None, strict : bool = True):
        self._strict : bool = strict
        self._cues : tuple[VttCue, ...] = tuple(cues or ())
        self._errors : tuple[CueError, ...] = tuple(errors or ())
        self._meta : dict[str, Any]|None = dict(meta) if meta is not None else None

    @property
    def valid(self) -> bool:
        return not self._errors

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def cues(self) -> tuple[VttCue, ...]:
        return self._cues

    @property
    def errors(self) -> tuple[CueError, ...]:
        return self._errors

    @property
    def meta(self) -> Mapping[str, Any]|None:
        return MappingProxyType(self._meta) if self._meta is not None else None

    def __len__(self) -> int:
        return len(self._cues)

    def __iter__(self):
        return iter(self._cues)

    def to_dict(self) -> dict[str, Any]:
        return {
            'valid': self.valid,
            'strict': self._strict,
            'cues': [ cue.to_dict() for cue in self._cues ],
            'errors': [ str(error) for error in self._errors ],
            'meta': dict(self._meta) if self._meta is not None else None
        }

    def __repr__(self) -> str:
        return f"VttDocument(valid={self.valid}, strict={self._strict}, cues={len(self._cues)}, errors={len(self._errors)}, meta={self._meta!r})"
