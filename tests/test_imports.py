"""Tests for shareddeps.imports."""

from __future__ import annotations

import textwrap

from shareddeps.imports import scan_imports


def _source(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def test_scan_imports_recognizes_declaration_forms() -> None:
    text = _source(
        """
        import React from 'react';
        import * as ReactDOM from "react-dom";
        import { injectable, inject } from 'inversify';
        import type { Widget } from '@lumino/widgets';
        import './style.css';
        import fs = require('fs');
        """
    )

    modules = [(ref.module, ref.kind) for ref in scan_imports(text)]

    assert modules == [
        ("react", "import"),
        ("react-dom", "import"),
        ("inversify", "import"),
        ("@lumino/widgets", "import"),
        ("./style.css", "import"),
        ("fs", "import-equals"),
    ]


def test_scan_imports_offsets_cover_the_quoted_literal() -> None:
    text = 'const x = 1;\nimport { a } from "inversify";\n'

    (reference,) = scan_imports(text)

    assert text[reference.start:reference.end] == '"inversify"'
    assert reference.line == 2
    assert reference.column == text.split("\n")[1].index('"inversify"')


def test_scan_imports_handles_multiline_specifiers() -> None:
    text = _source(
        """
        import {
            Container,
            injectable,
        } from 'inversify';
        """
    )

    (reference,) = scan_imports(text)

    assert reference.module == "inversify"
    assert reference.line == 4


def test_scan_imports_ignores_comments_and_template_strings() -> None:
    text = _source(
        """
        // import React from 'react';
        /* import { a } from 'inversify'; */
        const doc = `import x from 'lodash'`;
        const url = 'http://example.com'; import y from 'react-dom';
        """
    )

    modules = [ref.module for ref in scan_imports(text)]

    assert modules == ["react-dom"]


def test_scan_imports_skips_dynamic_imports_and_plain_requires() -> None:
    text = _source(
        """
        const lazy = import('react');
        const fs = require('fs');
        obj.import('x');
        """
    )

    assert scan_imports(text) == []


def test_scan_imports_ignores_import_text_inside_string_literals() -> None:
    text = _source(
        """
        const snippet = "import React from 'react';";
        const other = 'import x = require("inversify")';
        import { a } from 'inversify';
        """
    )

    references = scan_imports(text)

    assert [(ref.module, ref.line) for ref in references] == [("inversify", 3)]
    assert scan_imports('const snippet = "import React from \'react\';";\n') == []
