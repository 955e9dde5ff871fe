import unittest
from collections.abc import Mapping
from typing import Any

from PyWebVTT.Helpers.TestCases import LoggedTestCase
from PyWebVTT.MetadataCodec import (
    JsonMetadataCodec,
    MetadataCodec,
    MetadataScope,
    MergeMetadata,
    ReadMetadataBlock,
    WriteMetadataBlock,
)


class KeyValueCodec(MetadataCodec):
    """ Encodes flat string mappings as key=value pairs """
    def encode(self, meta : Mapping[str, Any]) -> str:
        return ";".join(f"{key}={value}" for key, value in meta.items())

    def decode(self, payload : str) -> dict[str, Any]:
        pairs = [ item.split("=", 1) for item in payload.strip().split(";") if item ]
        if any(len(pair) != 2 for pair in pairs):
            raise ValueError("Malformed pair")
        return { key: value for key, value in pairs }


class TestReadMetadataBlock(LoggedTestCase):
    def test_DocumentMetadata(self):
        lines = ['NOTE MCONF_META {"lang": "en", "count": 2}']
        expected = (MetadataScope.DOCUMENT, {"lang": "en", "count": 2})
        self.assertLoggedEqual("document metadata", expected, ReadMetadataBlock(lines), input_value=lines)

    def test_CueMetadata(self):
        lines = ['  NOTE MCONF_CUE_META {"speaker": "Alice"}', "ignored second line"]
        expected = (MetadataScope.CUE, {"speaker": "Alice"})
        self.assertLoggedEqual("cue metadata", expected, ReadMetadataBlock(lines), input_value=lines)

    def test_EarliestSentinelWins(self):
        lines = ['NOTE MCONF_CUE_META {"note": "mentions MCONF_META"}']
        expected = (MetadataScope.CUE, {"note": "mentions MCONF_META"})
        self.assertLoggedEqual("cue sentinel first", expected, ReadMetadataBlock(lines), input_value=lines)

    def test_NotMetadata(self):
        cases = [
            [],
            ["NOTE just a comment"],
            ["00:00:01.000 --> 00:00:02.000", "MCONF_META {}"],
            ['identifier MCONF_META {"a": 1}'],
        ]
        for lines in cases:
            with self.subTest(lines=lines):
                self.assertLoggedIsNone("not a metadata block", ReadMetadataBlock(lines), input_value=lines)

    def test_MalformedPayload(self):
        cases = [
            ['NOTE MCONF_META {"lang": '],
            ['NOTE MCONF_CUE_META [1, 2, 3]'],
            ['NOTE MCONF_META'],
        ]
        for lines in cases:
            with self.subTest(lines=lines):
                self.assertLoggedRaises(str(lines), ValueError, ReadMetadataBlock, lines)

    def test_CustomCodec(self):
        lines = ["NOTE MCONF_META lang=en;kind=captions"]
        expected = (MetadataScope.DOCUMENT, {"lang": "en", "kind": "captions"})
        self.assertLoggedEqual("custom codec", expected, ReadMetadataBlock(lines, KeyValueCodec()), input_value=lines)


class TestWriteMetadataBlock(LoggedTestCase):
    def test_WriteDocumentMetadata(self):
        result = WriteMetadataBlock(MetadataScope.DOCUMENT, {"lang": "en"})
        self.assertLoggedEqual("document block", 'NOTE MCONF_META {"lang": "en"}', result)

    def test_WriteCueMetadata(self):
        result = WriteMetadataBlock(MetadataScope.CUE, {"speaker": "Zoë"})
        self.assertLoggedEqual("cue block", 'NOTE MCONF_CUE_META {"speaker": "Zoë"}', result)

    def test_ArrowIsEscaped(self):
        meta = {"comment": "a --> b", "nested": {"x": "-->"}}
        block = WriteMetadataBlock(MetadataScope.CUE, meta)
        self.assertLoggedTrue("no arrow in block", "-->" not in block, input_value=block)

        result = ReadMetadataBlock([block])
        self.assertLoggedEqual("escaped payload decodes", (MetadataScope.CUE, meta), result)

    def test_CustomCodecArrowStripped(self):
        block = WriteMetadataBlock(MetadataScope.DOCUMENT, {"a": "-->b"}, KeyValueCodec())
        self.assertLoggedEqual("arrow stripped", "NOTE MCONF_META a=b", block)

    def test_UnencodableMetadata(self):
        self.assertLoggedRaises("set value", ValueError, WriteMetadataBlock, MetadataScope.DOCUMENT, {"a": {1, 2}})

    def test_JsonCodecRejectsNonObjects(self):
        codec = JsonMetadataCodec()
        for payload in ('"text"', '42', 'null'):
            with self.subTest(payload=payload):
                self.assertLoggedRaises(payload, ValueError, codec.decode, payload)


class TestMergeMetadata(LoggedTestCase):
    def test_Merge(self):
        cases = [
            (None, None, None),
            (None, {"a": 1}, {"a": 1}),
            ({"a": 1}, None, {"a": 1}),
            ({"a": 1}, {"a": 2, "b": 3}, {"a": 2, "b": 3}),
            ({"a": 1, "c": 4}, {"a": 2, "b": 3}, {"a": 2, "b": 3, "c": 4}),
            ({"a": {"x": 1}}, {"a": {"y": 2}}, {"a": {"y": 2}}),
        ]
        for existing, update, expected in cases:
            with self.subTest(existing=existing, update=update):
                self.assertLoggedEqual("merged", expected, MergeMetadata(existing, update), input_value=(existing, update))

    def test_MergeDoesNotModifyInputs(self):
        existing = {"a": 1}
        MergeMetadata(existing, {"a": 2})
        self.assertLoggedEqual("existing unchanged", {"a": 1}, existing)


if __name__ == '__main__':
    unittest.main()
