import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from typespec_bridge.cli import main
from typespec_bridge.config import get_settings

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliToTypeSpec:
    def test_from_jsonapi_yaml(self, tmp_path):
        output_file = tmp_path / "blog.tsp"
        runner = CliRunner()
        result = runner.invoke(main, ["to-typespec", str(FIXTURES / "blog-schema.yml"), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        text = output_file.read_text()
        assert "namespace JsonApi {" in text
        assert "  model Articles {" in text
        assert "    author: Authors;" in text
        assert "Converted 2 serializers." in result.output

    def test_options(self, tmp_path):
        output_file = tmp_path / "blog.tsp"
        runner = CliRunner()
        result = runner.invoke(main, [
            "to-typespec", str(FIXTURES / "blog-schema.yml"),
            "-o", str(output_file),
            "--namespace", "Blog",
            "--title", "Blog Service",
            "--operations",
            "--no-relationships",
        ])

        assert result.exit_code == 0, result.output
        text = output_file.read_text()
        assert "namespace Blog {" in text
        assert 'title: "Blog Service",' in text
        assert "op listArticles(): Articles[];" in text
        assert "author: Authors;" not in text

    def test_warnings_reported(self, tmp_path):
        doc = tmp_path / "broken.yaml"
        doc.write_text("serializers:\n  - name: Broken\n")
        output_file = tmp_path / "out.tsp"
        runner = CliRunner()
        result = runner.invoke(main, ["to-typespec", str(doc), "-o", str(output_file), "--format", "jsonapi"])

        assert result.exit_code == 0
        assert "warning:" in result.output
        assert "namespace JsonApi {" in output_file.read_text()

    def test_unreadable_schema_fails(self, tmp_path):
        doc = tmp_path / "bad.json"
        doc.write_text('{"serializers": 3}')
        runner = CliRunner()
        result = runner.invoke(main, ["to-typespec", str(doc), "-o", str(tmp_path / "out.tsp"), "--format", "jsonapi"])

        assert result.exit_code == 1
        assert "Conversion failed" in result.output

    def test_malformed_json_fails(self, tmp_path):
        doc = tmp_path / "bad.json"
        doc.write_text("{oops")
        runner = CliRunner()
        result = runner.invoke(main, ["to-typespec", str(doc), "-o", str(tmp_path / "out.tsp"), "--format", "jsonapi"])

        assert result.exit_code == 1
        assert not (tmp_path / "out.tsp").exists()


class TestCliToOpenApi:
    def test_from_typespec_to_json(self, tmp_path):
        output_file = tmp_path / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, ["to-openapi", str(FIXTURES / "library.tsp"), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        doc = json.loads(output_file.read_text())
        assert doc["info"]["title"] == "Library API"
        assert set(doc["components"]["schemas"]) == {"Books", "Authors"}

    def test_from_jsonapi_to_yaml_with_servers(self, tmp_path):
        output_file = tmp_path / "openapi.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "to-openapi", str(FIXTURES / "blog-schema.yml"),
            "-o", str(output_file),
            "--operations",
            "--server", "http://localhost:3000",
        ])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(output_file.read_text())
        assert doc["servers"] == [{"url": "http://localhost:3000"}]
        assert "/articles/{id}" in doc["paths"]
        assert "unresolved reference #/components/schemas/Tags" in result.output

    def test_openapi_input_rejected(self, tmp_path):
        doc = tmp_path / "openapi.json"
        doc.write_text('{"openapi": "3.0.3"}')
        runner = CliRunner()
        result = runner.invoke(main, ["to-openapi", str(doc), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 2


class TestCliToJsonApi:
    def test_from_typespec(self, tmp_path):
        output_file = tmp_path / "schema.yml"
        runner = CliRunner()
        result = runner.invoke(main, ["to-jsonapi", str(FIXTURES / "library.tsp"), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output_file.read_text())
        assert [s["name"] for s in data["serializers"]] == ["BooksSerializer", "AuthorsSerializer"]
        assert data["serializers"][0]["resource"]["relationships"][0]["resource"] == "authors"


class TestCliSettings:
    def test_title_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TYPESPEC_BRIDGE_TITLE", "Env Blog")
        get_settings.cache_clear()
        try:
            output_file = tmp_path / "blog.tsp"
            result = CliRunner().invoke(main, ["to-typespec", str(FIXTURES / "blog-schema.yml"), "-o", str(output_file)])
        finally:
            get_settings.cache_clear()

        assert result.exit_code == 0, result.output
        assert 'title: "Env Blog",' in output_file.read_text()

    def test_title_option_overrides_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TYPESPEC_BRIDGE_TITLE", "Env Blog")
        get_settings.cache_clear()
        try:
            output_file = tmp_path / "blog.tsp"
            result = CliRunner().invoke(main, [
                "to-typespec", str(FIXTURES / "blog-schema.yml"),
                "-o", str(output_file),
                "--title", "Flag Blog",
            ])
        finally:
            get_settings.cache_clear()

        assert result.exit_code == 0, result.output
        assert 'title: "Flag Blog",' in output_file.read_text()

    def test_schema_title_used_without_setting(self, tmp_path):
        output_file = tmp_path / "blog.tsp"
        result = CliRunner().invoke(main, ["to-typespec", str(FIXTURES / "blog-schema.yml"), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        assert 'title: "Blog API",' in output_file.read_text()
