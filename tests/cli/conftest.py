"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest

from sourceref.config import loader

CATALOG = """\
objects:
  - uri: /sap/bc/adt/oo/classes/zcl_demo
    name: ZCL_DEMO
    object_type: CLAS/OC
    source: |
      CLASS zcl_demo DEFINITION PUBLIC.
      ENDCLASS.
  - uri: /sap/bc/adt/oo/classes/zcl_demo_helper
    name: ZCL_DEMO_HELPER
    object_type: CLAS/OC
  - uri: /sap/bc/adt/oo/classes/zdup
    name: ZDUP
    object_type: CLAS/OC
  - uri: /sap/bc/adt/programs/programs/zdup
    name: ZDUP
    object_type: PROG/P
"""


@pytest.fixture
def cli_home(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run commands from tmp_path with no global or project config."""
    clean_env.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "global.yaml")
    clean_env.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def catalog_file(cli_home: Path) -> Path:
    path = cli_home / "catalog.yaml"
    path.write_text(CATALOG)
    return path
