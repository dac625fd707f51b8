"""End-to-end tests for the command line interface."""

import json

import pytest

from stylekit.__main__ import main


@pytest.fixture
def settings_file(tmp_path):
    def _write(data) -> str:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


class TestCli:
    """Tests for python -m stylekit commands."""

    @pytest.mark.integration
    def test_no_command(self, capsys):
        assert main([]) == 1

    @pytest.mark.integration
    def test_widgets(self, capsys):
        assert main(["widgets"]) == 0
        out = capsys.readouterr().out
        assert [line.split()[0] for line in out.splitlines()] == ["button", "heading", "spacer"]

    @pytest.mark.integration
    def test_schema_tree(self, capsys):
        assert main(["schema", "spacer"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "Spacer (style)"
        assert "Height (height) [number, responsive, css]" in out

    @pytest.mark.integration
    def test_schema_json(self, capsys):
        assert main(["schema", "heading", "--category", "general", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["category"] == "general"
        assert data["items"][0]["key"] == "content"

    @pytest.mark.integration
    def test_unknown_widget(self):
        assert main(["schema", "carousel"]) == 1

    @pytest.mark.integration
    def test_css(self, capsys, settings_file):
        path = settings_file({"style": {"spacing": {"height": {"desktop": 40, "mobile": 10}}}})
        assert main(["css", "spacer", "--settings", path, "--id", "widget-42", "--section", "sec-7"]) == 0
        out = capsys.readouterr().out
        assert "#sec-7 #widget-42 .spacer-element {\n  height: 40px;\n}" in out
        assert "@media (max-width: 767px)" in out

    @pytest.mark.integration
    def test_css_minify_to_file(self, tmp_path, settings_file):
        path = settings_file({})
        output = tmp_path / "out.css"
        assert main(["css", "spacer", "-s", path, "--id", "s", "--minify", "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "#s .spacer-element{height:50px;}"

    @pytest.mark.integration
    def test_missing_settings_file(self, tmp_path):
        assert main(["css", "spacer", "-s", str(tmp_path / "missing.json"), "--id", "s"]) == 1

    @pytest.mark.integration
    def test_attrs(self, capsys, settings_file):
        path = settings_file({"general": {"layout": {"width": "full"}}})
        assert main(["attrs", "button", "-s", path]) == 0
        out = capsys.readouterr().out
        assert "w-full" in out.splitlines()[0]

    @pytest.mark.integration
    def test_validate(self, capsys, settings_file):
        good = settings_file({"general": {"content": {"heading_level": "h3"}}})
        assert main(["validate", "heading", "-s", good]) == 0

        bad = settings_file({"general": {"content": {"heading_level": "h9"}}})
        assert main(["validate", "heading", "-s", bad]) == 1
        assert "general.content.heading_level" in capsys.readouterr().out

    @pytest.mark.integration
    def test_render(self, capsys):
        assert main(["render", "spacer", "--id", "s-1"]) == 0
        assert capsys.readouterr().out.startswith('<div id="s-1"')
