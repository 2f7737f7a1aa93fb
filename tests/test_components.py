from postsite.components import render_markdown


def test_icon_shortcodes_render_images():
    html_text = render_markdown("Find me on :github: and :linkedin:.")

    assert 'src="icons/github.svg"' in html_text
    assert 'alt="GitHub Logo"' in html_text
    assert 'src="icons/linkedin.svg"' in html_text
    assert 'class="icon"' in html_text


def test_unknown_shortcode_is_left_alone():
    assert ":twitter:" in render_markdown("Not on :twitter:.")


def test_shortcode_inside_code_is_literal():
    html_text = render_markdown("Use `:github:` in a post.")

    assert "<code>:github:</code>" in html_text
    assert "icons/github.svg" not in html_text


def test_external_links_open_in_new_tab():
    html_text = render_markdown("[GitHub](https://github.com/e-goat) and [home](/index.html)")

    assert 'href="https://github.com/e-goat"' in html_text
    assert html_text.count('target="_blank"') == 1
    assert 'rel="noopener noreferrer"' in html_text
    assert '<a href="/index.html">home</a>' in html_text


def test_fenced_code_is_highlighted():
    html_text = render_markdown("```python\nprint('hi')\n```\n")

    assert 'class="codehilite"' in html_text
    assert "print" in html_text


def test_tables_are_enabled():
    html_text = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert "<table>" in html_text
