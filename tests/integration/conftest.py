"""Pytest configuration and fixtures for integration tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tests.fixtures.adf_fixtures import (
    create_adf_doc,
    create_bullet_list,
    create_code_block,
    create_heading,
    create_list_item,
    create_mark,
    create_ordered_list,
    create_paragraph,
    create_table,
    create_text,
)


@pytest.fixture
def release_page() -> Dict[str, Any]:
    """A page mixing headings, lists, marks, a table and a code block."""
    return create_adf_doc([
        create_heading("Release 2.4", level=1),
        create_paragraph(
            "Deployed by ",
            {"type": "mention", "attrs": {"id": "42", "text": "@dana"}},
            " on ",
            {"type": "date", "attrs": {"timestamp": "1704067200000"}},
            ".",
        ),
        create_heading("Changes", level=2),
        create_bullet_list(
            create_list_item(create_paragraph(
                create_text("Faster", [create_mark("strong")]),
                " search",
            )),
            create_list_item(
                create_paragraph("Fixes"),
                create_ordered_list(
                    create_list_item(create_paragraph("Login loop")),
                    create_list_item(create_paragraph(
                        create_text("Export", [create_mark("link", href="https://jira.example.com/EX-1")]),
                    )),
                ),
            ),
        ),
        create_table([["Service", "Status"], ["api", "green"]]),
        create_code_block("make deploy", language="bash"),
    ])


@pytest.fixture
def page_file(tmp_path: Path, release_page: Dict[str, Any]) -> Path:
    """The release page written to a JSON file."""
    path = tmp_path / "release.json"
    path.write_text(json.dumps(release_page), encoding="utf-8")
    return path
