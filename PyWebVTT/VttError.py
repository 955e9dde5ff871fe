from __future__ import annotations


class VttError(Exception):
    """
    Base class for all errors raised while parsing or compiling WebVTT documents.
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message : str|None = message
        self.error : Exception|None = error

    def __str__(self) -> str:
        if self.error:
            return f"{self.message} ({str(self.error)})"
        return str(self.message)

class StructuralError(VttError):
    """ The document skeleton is malformed (signature, header or separators) """
    pass

class CueError(VttError):
    """
    A single cue block failed the grammar or chronology rules.

    index is the 0-based position of the block after the header.
    """
    def __init__(self, message : str|None = None, index : int|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.index : int|None = index

class CompilerError(VttError):
    """
    A document or cue could not be compiled.

    index is the 0-based position of the offending cue, field the offending attribute.
    """
    def __init__(self, message : str|None = None, index : int|None = None, field : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.index : int|None = index
        self.field : str|None = field
