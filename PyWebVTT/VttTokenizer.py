from typing import Any

import regex

from PyWebVTT.Helpers.Localization import _
from PyWebVTT.VttError import StructuralError

SIGNATURE = 'WEBVTT'

_LINE_ENDING_PATTERN = regex.compile(r'\r\n?')

def SplitBlocks(content : str) -> list[str]:
    """
    Normalise line endings and split a document into blank-line separated blocks.
    The first block is the header.
    """
    content = _LINE_ENDING_PATTERN.sub('\n', content)
    content = content.lstrip('\ufeff').strip()
    return content.split('\n\n')

def SplitLines(block : str) -> list[str]:
    """
    Split a block into lines, dropping empty ones
    """
    return [ line for line in block.split('\n') if line ]

def ValidateHeader(header : str, read_meta : bool = False) -> dict[str, Any]|None:
    """
    Check the signature line and return header metadata if read_meta is set.

    Raises:
        StructuralError: If the signature is missing, the header comment is malformed,
            or further header lines are present when they are not expected
    """
    header_lines = header.split('\n')
    signature_line = header_lines[0]

    if not signature_line.startswith(SIGNATURE):
        raise StructuralError(_("Must start with \"{}\"").format(SIGNATURE))

    comment = signature_line[len(SIGNATURE):]
    if comment and comment[0] not in (' ', '\t'):
        raise StructuralError(_("Header comment must start with space or tab"))

    extra_lines = header_lines[1:]
    if not read_meta:
        if extra_lines and extra_lines[0] != '':
            raise StructuralError(_("Missing blank line after signature"))
        return None

    return _parse_header_fields(extra_lines)

def _parse_header_fields(lines : list[str]) -> dict[str, Any]|None:
    fields : dict[str, Any] = {}
    for line in lines:
        if not line.strip():
            continue

        key, separator, value = line.partition(':')
        key = key.strip()
        if not separator or not key:
            raise StructuralError(_("Malformed header line, expected \"key: value\": {}").format(line))

        fields[key] = value.strip()

    return fields or None
