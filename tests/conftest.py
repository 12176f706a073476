"""
Pytest configuration for local imports and shared label fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# local repo modules
import chart_label_geometry as clg  # noqa: E402
import chart_label_geometry.capabilities  # noqa: E402
import chart_label_geometry.config  # noqa: E402


#============================================
def fake_measure(text: str, style: clg.config.ResolvedStyle) -> clg.config.TextSize:
	"""
	Deterministic measurement: half an em per character, one em tall.
	"""
	return clg.config.TextSize(width=len(text) * style.font_size * 0.5, height=style.font_size)


#============================================
@pytest.fixture
def warnings_seen() -> list[str]:
	"""
	Collected warning messages.
	"""
	return []


#============================================
@pytest.fixture
def capabilities(warnings_seen: list[str]) -> clg.capabilities.Capabilities:
	"""
	Capabilities with fake measurement and a collecting warning sink.
	"""
	return clg.capabilities.Capabilities(measure=fake_measure, warn=warnings_seen.append)
