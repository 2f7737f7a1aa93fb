import argparse

import pytest

from postsite.config import ConfigValues, load_config, parse_bool, resolve_analytics


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "site.toml") == {}


def test_load_config_toml(tmp_path):
    path = tmp_path / "site.toml"
    path.write_text('site_name = "Blog"\ntheme_toggle = false\n', encoding="utf-8")

    assert load_config(path) == {"site_name": "Blog", "theme_toggle": False}


def test_load_config_yaml(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("site_name: Blog\nclean: 'no'\n", encoding="utf-8")

    assert load_config(path) == {"site_name": "Blog", "clean": "no"}


def test_load_config_empty_yaml(tmp_path):
    path = tmp_path / "site.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


def test_load_config_json(tmp_path):
    path = tmp_path / "site.json"
    path.write_text('{"output": "public"}', encoding="utf-8")

    assert load_config(path) == {"output": "public"}


@pytest.mark.parametrize(
    "name, text",
    [
        ("site.json", "{not json"),
        ("site.json", "[1, 2]"),
        ("site.toml", "site_name = "),
        ("site.yaml", "- a\n- b\n"),
    ],
)
def test_load_config_invalid_exits(tmp_path, capsys, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        load_config(path)

    assert excinfo.value.code == 1
    assert str(path) in capsys.readouterr().err


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), ("yes", True), (" On ", True), (1, True), ("off", False), (0, False), (None, False)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_config_values_defaults():
    cfg = ConfigValues({"site_name": "Blog", "clean": "false", "output": None})

    assert cfg.get_str("site_name", "x") == "Blog"
    assert cfg.get_str("output", "dist") == "dist"
    assert cfg.get_bool("clean", True) is False
    assert cfg.get_bool("theme_toggle", True) is True


def test_resolve_analytics_prefers_inline_html(tmp_path):
    args = argparse.Namespace(analytics_html=" <script>a()</script> ", analytics_file="x.html", config="site.toml")

    assert resolve_analytics(args) == "<script>a()</script>"


def test_resolve_analytics_reads_file_next_to_config(tmp_path):
    (tmp_path / "analytics.html").write_text("<script>b()</script>", encoding="utf-8")
    args = argparse.Namespace(
        analytics_html="", analytics_file="analytics.html", config=str(tmp_path / "site.toml")
    )

    assert resolve_analytics(args) == "<script>b()</script>"


def test_resolve_analytics_missing_file_warns(tmp_path, capsys):
    args = argparse.Namespace(analytics_html="", analytics_file="gone.html", config=str(tmp_path / "site.toml"))

    assert resolve_analytics(args) == ""
    assert "Analytics file not found" in capsys.readouterr().err
