"""Shared test fixtures for Tinplate tests."""

from pathlib import Path

import pytest


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Create a directory with a page template and a partials directory."""
    (tmp_path / "page.tpl").write_text(
        "<h1>{{title}}</h1>{% for items as item %}{> row}{% end %}", encoding="utf-8"
    )
    partials_dir = tmp_path / "partials"
    partials_dir.mkdir()
    (partials_dir / "row.tpl").write_text("<p>{{item}}</p>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def sample_data() -> str:
    """Return JSON data matching the page template."""
    return '{"title": "List", "items": ["a", "b"]}'
