from __future__ import annotations

import xml.etree.ElementTree as etree

import markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor

RE_ICON = r":(?P<name>github|linkedin):"
ICON_LABELS = {
    "github": "GitHub",
    "linkedin": "LinkedIn",
}
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite"]


class IconProcessor(InlineProcessor):
    def handleMatch(self, m, data):
        name = m.group("name")
        el = etree.Element("img")
        # Relative on purpose: fix_relative_img_src rewrites it per page depth.
        el.set("src", f"icons/{name}.svg")
        el.set("alt", f"{ICON_LABELS[name]} Logo")
        el.set("class", "icon")
        el.set("width", "22")
        el.set("height", "22")
        return el, m.start(0), m.end(0)


class ExternalLinkProcessor(Treeprocessor):
    def run(self, root):
        for el in root.iter("a"):
            href = el.get("href", "")
            if href.startswith(("http://", "https://")):
                el.set("target", "_blank")
                el.set("rel", "noopener noreferrer")


class ComponentsExtension(Extension):
    """Embeddable components allowed inside post bodies: icons and external links.

    Images use the plain Markdown syntax and need no registration.
    """

    def extendMarkdown(self, md):
        md.inlinePatterns.register(IconProcessor(RE_ICON, md), "icons", 175)
        md.treeprocessors.register(ExternalLinkProcessor(md), "external_links", 5)


def create_markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[*MARKDOWN_EXTENSIONS, ComponentsExtension()],
        extension_configs={"codehilite": {"guess_lang": False}},
    )


def render_markdown(text: str) -> str:
    md = create_markdown()
    html_content = md.convert(text)
    md.reset()
    return html_content
