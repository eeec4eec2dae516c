from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.workspace_builder import WorkspaceBuilder


@pytest.fixture
def workspace_builder(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a pride root under the pytest tmp_path."""
    return WorkspaceBuilder(tmp_path)
