import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from openapi_dereferencer.cli import openapi_deref

TEST_DATA = Path(__file__).parent / "test_data"
PETSTORE = str(TEST_DATA / "petstore.json")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    """Tests for the openapi_deref command"""

    def test_prints_to_stdout(self, runner):
        result = runner.invoke(openapi_deref, [PETSTORE])
        assert result.exit_code == 0, result.output
        output = json.loads(result.output)
        assert output["paths"]["/pets/{petId}"]["get"]["operationId"] == "getPet"

    def test_writes_output_file(self, runner, tmp_path):
        output = tmp_path / "deref.json"
        result = runner.invoke(openapi_deref, [PETSTORE, str(output)])
        assert result.exit_code == 0, result.output
        written = json.loads(output.read_text())
        assert written["paths"]["/pets"]["post"]["requestBody"]["required"] is True

    def test_refuses_to_overwrite(self, runner, tmp_path):
        output = tmp_path / "deref.json"
        output.write_text("{}")
        result = runner.invoke(openapi_deref, [PETSTORE, str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text() == "{}"

    def test_force_overwrites(self, runner, tmp_path):
        output = tmp_path / "deref.json"
        output.write_text("{}")
        result = runner.invoke(openapi_deref, ["--force", PETSTORE, str(output)])
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["openapi"] == "3.1.0"

    def test_servers(self, runner):
        result = runner.invoke(openapi_deref, ["--servers", PETSTORE])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "https://api.example.com/v1",
            "https://pets.example.com",
            "https://read.example.com",
            "https://item.example.com",
            "https://item-read.example.com",
        ]

    def test_annotate_refs_and_indent(self, runner):
        result = runner.invoke(openapi_deref, ["--annotate-refs", "--indent", "0", PETSTORE])
        assert result.exit_code == 0, result.output
        output = json.loads(result.output)
        assert output["paths"]["/pets/{petId}"]["x-resolved-ref"] == "#/components/pathItems/PetById"

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"annotate_resolved_refs": True, "ref_annotation_key": "x-from"}))
        result = runner.invoke(openapi_deref, ["--config", str(config), PETSTORE])
        assert result.exit_code == 0, result.output
        output = json.loads(result.output)
        assert output["webhooks"]["newPet"]["x-from"] == "#/components/pathItems/PetWebhook"

    def test_unsupported_version(self, runner):
        result = runner.invoke(openapi_deref, [str(TEST_DATA / "petstore_3_0.json")])
        assert result.exit_code == 1
        assert "Unsupported open api version 3.0.3" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(openapi_deref, [str(tmp_path / "missing.json")])
        assert result.exit_code == 2
