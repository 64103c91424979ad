"""Tests for the srcref route command."""

import json

from click.testing import CliRunner

from sourceref.cli.main import cli


class TestRouteCommand:
    def test_given_abap_file_when_route_then_structured(self) -> None:
        result = CliRunner().invoke(cli, ["route", "b/src/zcl_demo.clas.abap"])

        assert result.exit_code == 0
        assert "Kind: structured-object" in result.stdout
        assert "Language: abap" in result.stdout

    def test_given_workspace_path_when_route_json_then_payload(self) -> None:
        # When
        result = CliRunner().invoke(cli, ["route", "--json", "a\\web\\panel.tsx"])

        # Then
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "kind": "workspace-path",
            "normalized_ref": "a/web/panel.tsx",
            "display_language": "typescript",
        }
