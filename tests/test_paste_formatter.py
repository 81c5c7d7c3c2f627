"""Tests for sealbin.paste.formatter."""

from sealbin.paste.classifier import Language
from sealbin.paste.formatter import format_code


class TestJson:
    def test_pretty_prints(self):
        assert format_code('{"a":1,"b":[1,2]}', Language.JSON) == (
            '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'
        )

    def test_keeps_unicode(self):
        assert format_code('{"name":"héllo"}', Language.JSON) == '{\n  "name": "héllo"\n}'

    def test_invalid_returned_unchanged(self):
        assert format_code("{not json", Language.JSON) == "{not json"

    def test_accepts_string_label(self):
        assert format_code("[1]", "json") == "[\n  1\n]"


class TestBracketIndent:
    def test_reindents_blocks(self):
        source = "if (x) {\nfoo();\n}"
        assert format_code(source, Language.JAVASCRIPT) == "if (x) {\n  foo();\n}"

    def test_nested(self):
        source = "a {\nb {\nc;\n}\n}"
        assert format_code(source, Language.CSS) == "a {\n  b {\n    c;\n  }\n}"

    def test_strips_existing_indentation(self):
        source = "        x = 1\n      y = 2"
        assert format_code(source, Language.PLAINTEXT) == "x = 1\ny = 2"

    def test_unbalanced_closer_never_negative(self):
        assert format_code("}\n}\nx", Language.C) == "}\n}\nx"


class TestBlank:
    def test_whitespace_untouched(self):
        assert format_code("   \n ", Language.PYTHON) == "   \n "
