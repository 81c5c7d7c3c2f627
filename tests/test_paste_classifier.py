"""Tests for sealbin.paste.classifier -- the ordered detection cascade."""

import pytest

from sealbin.paste.classifier import RULES, Language, detect_language, explain

SAMPLES = {
    "json_object": ('{"a":1}', Language.JSON),
    "json_array": ("[1, 2, 3]", Language.JSON),
    "markdown_heading": ("# Title\n", Language.MARKDOWN),
    "markdown_bullets": ("- item one\n- item two", Language.MARKDOWN),
    "markdown_numbered": ("1. first\n2. second", Language.MARKDOWN),
    "markdown_link": ("See [docs](https://example.com) for more", Language.MARKDOWN),
    "yaml": ("name: sealbin\nversion: 1", Language.YAML),
    "yaml_document_marker": ("---\nkey: value", Language.YAML),
    "dockerfile": ("FROM python:3.12-slim\nRUN pip install .", Language.DOCKERFILE),
    "bash_shebang": ("#!/bin/bash\necho hello", Language.BASH),
    "bash_keyword": ("export PATH=/usr/local/bin\necho done", Language.BASH),
    "powershell_via_shell": ("echo $env:PATH", Language.POWERSHELL),
    "powershell": ("[CmdletBinding()]\nParam(\n  [string]$Name\n)", Language.POWERSHELL),
    "python": ("def greet(name):\n    print(name)\n", Language.PYTHON),
    "python_import": ("import os\nprint(os.getcwd())", Language.PYTHON),
    "typescript": ("interface User {\n  id: number;\n}", Language.TYPESCRIPT),
    "tsx": ("const App = (): JSX.Element => <Button />;", Language.TSX),
    "jsx": (
        "import React from 'react';\nconst App = () => <div>Hello</div>;\nexport default App;",
        Language.JSX,
    ),
    "javascript": ("const x = 42;\nconsole.log(x);", Language.JAVASCRIPT),
    "sql": ("SELECT id, name FROM users WHERE active = 1", Language.SQL),
    "html": ("<!DOCTYPE html>\n<html>\n<body>Hi</body>\n</html>", Language.HTML),
    "xml": ('<?xml version="1.0"?>\n<note><to>Tove</to></note>', Language.XML),
    "csharp": ("using System;\nnamespace App {}", Language.CSHARP),
    "go": ("package main\nfunc main() {}", Language.GO),
    "rust": ('fn main() {\n    println!("hi");\n}', Language.RUST),
    "ruby": ("puts 'hello'\n", Language.RUBY),
    "php": ("<?php\n$name = 'world';\n", Language.PHP),
    "kotlin": ('fun main() {\n    println("Hi")\n}', Language.KOTLIN),
    "c": (
        '#include <stdio.h>\nint main(void) {\n    printf("hi");\n    return 0;\n}',
        Language.C,
    ),
    "cpp": ("#include <iostream>\nusing namespace std;\n", Language.CPP),
    "css": ("body {\n  color: red;\n}", Language.CSS),
    "scss": ("$primary: #333;\n.btn {\n  color: $primary;\n}", Language.SCSS),
}


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

class TestDetectLanguage:
    @pytest.mark.parametrize("name", sorted(SAMPLES))
    def test_samples(self, name):
        content, expected = SAMPLES[name]
        assert detect_language(content) is expected

    @pytest.mark.parametrize("content", ["", "   ", "\n\t\n"])
    def test_blank_is_plaintext(self, content):
        assert detect_language(content) is Language.PLAINTEXT

    def test_prose_is_plaintext(self):
        assert detect_language("hello world") is Language.PLAINTEXT

    def test_non_standard_json_constant_is_not_json(self):
        assert detect_language('{"a": NaN}') is Language.PLAINTEXT

    def test_invalid_json_falls_through(self):
        assert detect_language("{ color: red; }") is not Language.JSON

    def test_deterministic(self):
        for content, _ in SAMPLES.values():
            assert detect_language(content) is detect_language(content)

    def test_surrounding_whitespace_ignored_for_anchors(self):
        assert detect_language("\n\n   # Heading\ntext") is Language.MARKDOWN

    def test_js_declaration_blocks_shell(self):
        # 'export' alone would read as bash; a const marks it as JavaScript.
        assert detect_language("export const x = 1;") is Language.JAVASCRIPT

    def test_js_declaration_blocks_python(self):
        assert detect_language("import x from 'y';\nconst z = x;") is Language.JAVASCRIPT

    def test_python_shadows_class_only_java(self):
        # Earlier rules win: 'class' without a JS declaration is python.
        assert detect_language("public class Main {\n}") is Language.PYTHON

    def test_markdown_link_with_tags_is_not_markdown(self):
        assert detect_language('<a href="x">[x](y)</a>') is not Language.MARKDOWN

    def test_every_label_is_a_language(self):
        for content, _ in SAMPLES.values():
            assert isinstance(detect_language(content), Language)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

def _rule(name):
    return next(r for r in RULES if r.name == name)


class TestRules:
    def test_order(self):
        assert [r.name for r in RULES] == [
            "json", "markdown", "yaml", "dockerfile", "shell", "powershell",
            "python", "typescript", "jsx", "javascript", "sql", "html", "xml",
            "java", "csharp", "go", "rust", "ruby", "php", "swift", "kotlin",
            "c", "cpp", "css",
        ]

    def test_rule_labels_are_declared(self):
        for content, expected in SAMPLES.values():
            rule = _rule(explain(content))
            assert expected in rule.labels

    def test_java_predicate(self):
        content = "public class Main {}"
        assert _rule("java").match(content, content) is Language.JAVA

    def test_swift_predicate(self):
        content = "import UIKit\nstruct Point {}"
        assert _rule("swift").match(content, content.strip()) is Language.SWIFT

    def test_swift_predicate_requires_framework_import(self):
        content = "struct Point {}"
        assert _rule("swift").match(content, content) is None

    def test_go_package_is_anchored(self):
        content = "// package main"
        assert _rule("go").match(content, content) is None


class TestExplain:
    def test_names_deciding_rule(self):
        assert explain('{"a":1}') == "json"
        assert explain("package main\nfunc main() {}") == "go"

    def test_fallback_is_none(self):
        assert explain("hello world") is None
        assert explain("") is None
