from collections.abc import Iterable

from PyWebVTT.VttError import VttError

def FormatErrorMessages(errors : Iterable[VttError|str]) -> str:
    """
    Extract error messages from a list of errors
    """
    return ", ".join([ error.message or str(error) if isinstance(error, VttError) else str(error) for error in errors ])
