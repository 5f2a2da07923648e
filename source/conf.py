"""Sphinx configuration for the ALV metrics report."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / 'src'

sys.path.insert(0, str(SRC_PATH))

# pylint: disable=invalid-name,redefined-builtin,wrong-import-position

from config import __author__, __version__  # noqa: E402

project = 'ALV Metrics'
copyright = '2024, Koala ITCrowd'
author = __author__
release = __version__

extensions = ['sphinx.ext.autodoc', 'sphinx.ext.napoleon', 'sphinx_rtd_theme']

exclude_patterns: list[str] = []

# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
autodoc_default_options = {
    'members': True,
    'undoc-members': True,
    # ReportDateError subclasses ValueError
    'show-inheritance': True,
}

autodoc_typehints = 'description'
