"""Shared pytest fixtures for liquiddocs tests."""

import os
from pathlib import Path

import pytest
import structlog

DOCUMENTED_SNIPPET = """{% doc %}
  Renders a product card.

  @param {product} product - The product to render
  @param {string} [class_name] - Extra CSS class
  @example
  {% render 'card', product: product %}
{% enddoc %}
<div class="card {{ class_name }}">{{ product.title }}</div>
"""

PARSE_ERROR_SNIPPET = """{% doc %}
  Renders a button.

  @param {unknown} link - Where the button points
{% enddoc %}
<a href="{{ link }}">Go</a>
"""

MISSING_DOC_SNIPPET = """<div>{{ section.settings.title }}</div>
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove liquiddocs settings from the environment for all tests."""
    for key in list(os.environ):
        if key.upper().startswith("LIQUIDDOCS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def documented_snippet() -> str:
    """Template with one well-formed doc block."""
    return DOCUMENTED_SNIPPET


@pytest.fixture
def theme_dir(tmp_path: Path) -> Path:
    """Create a small theme with documented, broken and undocumented templates."""
    snippets = tmp_path / "snippets"
    snippets.mkdir()
    (snippets / "card.liquid").write_text(DOCUMENTED_SNIPPET)
    (snippets / "button.liquid").write_text(PARSE_ERROR_SNIPPET)

    blocks = tmp_path / "blocks"
    blocks.mkdir()
    (blocks / "title.liquid").write_text(MISSING_DOC_SNIPPET)

    return tmp_path


@pytest.fixture
def documented_dir(tmp_path: Path) -> Path:
    """Create a directory in which every template is documented."""
    snippets = tmp_path / "snippets"
    snippets.mkdir()
    (snippets / "card.liquid").write_text(DOCUMENTED_SNIPPET)
    (snippets / "badge.liquid").write_text(
        "{%- doc -%}\n  Renders a badge.\n  @param {string} label\n{%- enddoc -%}\n"
    )
    return tmp_path
