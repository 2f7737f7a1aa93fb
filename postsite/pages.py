from __future__ import annotations

import datetime as dt
import html
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from .components import render_markdown
from .content import Post, format_post_date, parse_front_matter
from .posts import PostIndex, PostNotFound, generate_metadata, generate_static_params, get_post_from_params, sort_posts
from .render import fix_relative_img_src, page_root, render_template, write_text

THEMES = ("light", "dark")


@dataclass
class AboutPage:
    title: str
    content: str


@dataclass
class Layout:
    """Everything a page needs besides its own content."""

    base_template: str
    site_name: str
    site_description: str
    tagline: str = ""
    author_name: str = ""
    github_url: str = ""
    theme_default: str = "dark"
    theme_toggle: bool = True
    analytics_html: str = ""
    about: Optional[AboutPage] = None


def load_about_page(path: Path) -> Optional[AboutPage]:
    if not path.exists():
        return None
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"))
    title = str(meta.get("title") or "About")
    return AboutPage(title=title, content=render_markdown(body))


def build_header(layout: Layout, root: str) -> str:
    links = [
        f'<a href="{root}/index.html">Home</a>',
    ]
    if layout.about is not None:
        links.append(f'<a href="{root}/about.html">About</a>')
    actions = []
    if layout.github_url:
        actions.append(
            f'<a class="github-link" href="{html.escape(layout.github_url)}" target="_blank" rel="noopener noreferrer">'
            f'<img class="icon" src="{root}/icons/github.svg" alt="GitHub Logo" width="22" height="22"></a>'
        )
    if layout.theme_toggle:
        actions.append(
            '<button class="theme-toggle" type="button" data-theme-toggle aria-label="Toggle theme">'
            f'<img class="icon" src="{root}/icons/dark-mode.svg" alt="" width="22" height="22"></button>'
        )
    return (
        '<header class="site-header">'
        f'<nav class="site-nav">{"".join(links)}</nav>'
        f'<div class="site-actions">{"".join(actions)}</div>'
        "</header>"
    )


def render_page(
    layout: Layout,
    root: str,
    title: str,
    content: str,
    description: Optional[str] = None,
    extra_head: str = "",
) -> str:
    theme = layout.theme_default if layout.theme_default in THEMES else "dark"
    return render_template(
        layout.base_template,
        title=html.escape(title),
        description=html.escape(description or layout.site_description),
        root=root,
        header=build_header(layout, root),
        site_name=html.escape(layout.site_name),
        theme_default=theme,
        year=str(dt.datetime.now().year),
        extra_head=extra_head,
        content=content,
        analytics=layout.analytics_html,
    )


def build_tag_badges(tags: Sequence[str]) -> str:
    if not tags:
        return ""
    badges = "".join(f'<span class="tag">{html.escape(tag)}</span>' for tag in tags)
    return f'<div class="post-tags">{badges}</div>'


def build_post_list(posts: Iterable[Post], root: str) -> str:
    items = []
    for post in posts:
        url = f"{root}{post.slug}.html"
        description = (
            f'<p class="post-description">{html.escape(post.description)}</p>' if post.description else ""
        )
        items.append(
            '<article class="post-entry">'
            f'<a class="post-link" href="{html.escape(url)}">'
            '<div class="post-heading">'
            f'<h2 class="post-title">{html.escape(post.title)}</h2>'
            f'<time class="post-date" datetime="{html.escape(post.date)}">{format_post_date(post.date)}</time>'
            "</div>"
            f"{description}"
            f"{build_tag_badges(post.tags)}"
            "</a>"
            "</article>"
        )
    return "\n".join(items)


def render_index(posts: Iterable[Post], layout: Layout) -> str:
    root = "."
    tagline = f'<p class="tagline">{html.escape(layout.tagline)}</p>' if layout.tagline else ""
    content = (
        '<header class="section-head">'
        "<h1>Posts</h1>"
        f"{tagline}"
        "</header>"
        f'<div class="post-list">{build_post_list(sort_posts(posts), root)}</div>'
    )
    return render_page(layout, root, layout.site_name, content)


def build_info(layout: Layout) -> str:
    author = layout.author_name or layout.site_name
    text = f"Hi, I&apos;m {html.escape(author)}."
    if layout.github_url:
        text += (
            " You can find more about my projects on my "
            f'<a href="{html.escape(layout.github_url)}" target="_blank" rel="noopener noreferrer">GitHub page</a>.'
        )
    return f'<section class="author-info"><p>{text}</p></section>'


def render_post_page(params: Optional[Mapping[str, Sequence[str]]], index: PostIndex, layout: Layout) -> str:
    post = get_post_from_params(params, index)
    if post is None:
        raise PostNotFound("/".join((params or {}).get("slug") or []))

    metadata = generate_metadata(params, index)
    root = page_root(len(params["slug"]))
    description = (
        f'<p class="post-description">{html.escape(post.description)}</p>' if post.description else ""
    )
    content = (
        '<article class="post">'
        f'<h1 class="post-title">{html.escape(post.title)}</h1>'
        f'<p class="post-date"><time datetime="{html.escape(post.date)}">{format_post_date(post.date)}</time></p>'
        f"{description}"
        "<hr>"
        f'<div class="post-body">{fix_relative_img_src(post.body, root)}</div>'
        f"{build_info(layout)}"
        "</article>"
    )
    return render_page(layout, root, metadata["title"], content, description=metadata["description"])


def render_not_found(layout: Layout, root: str = ".") -> str:
    content = (
        '<div class="not-found">'
        "<h1>404</h1>"
        "<h2>Page Not Found</h2>"
        "<p>The page you&apos;re looking for doesn&apos;t exist.</p>"
        f'<a href="{root}/index.html">Back to home</a>'
        "</div>"
    )
    return render_page(layout, root, f"404 | {layout.site_name}", content)


def render_about(layout: Layout) -> Optional[str]:
    about = layout.about
    if about is None:
        return None
    root = "."
    content = (
        '<article class="post">'
        f'<h1 class="post-title">{html.escape(about.title)}</h1>'
        f'<div class="post-body">{fix_relative_img_src(about.content, root)}</div>'
        "</article>"
    )
    return render_page(layout, root, f"{about.title} | {layout.site_name}", content)


def route_segments(path: str) -> list[str]:
    # Written files end in .html; `/posts/a.html` and `/posts/a` are the same route.
    segments = [segment for segment in path.split("?", 1)[0].strip("/").split("/") if segment]
    if segments and segments[-1].endswith(".html"):
        segments[-1] = segments[-1][: -len(".html")]
    return [segment for segment in segments if segment]


def resolve_route(path: str, index: PostIndex, layout: Layout) -> tuple[int, str]:
    """Render the page for a site path and return ``(status, html)``.

    ``/`` is the listing, ``/posts/{...slug}`` a post and ``/about`` the about
    page. Unknown paths and unknown slugs render the not-found page with 404.
    """
    segments = route_segments(path)
    root = page_root(max(len(segments) - 1, 0))
    if not segments or segments == ["index"]:
        return 200, render_index(index, layout)
    if segments[0] == "posts" and len(segments) > 1:
        try:
            return 200, render_post_page({"slug": segments[1:]}, index, layout)
        except PostNotFound:
            return 404, render_not_found(layout, root)
    if segments == ["about"]:
        about_html = render_about(layout)
        if about_html is not None:
            return 200, about_html
    return 404, render_not_found(layout, root)


def build_index(output_dir: Path, index: PostIndex, layout: Layout) -> None:
    write_text(output_dir / "index.html", render_index(index, layout))


def build_posts(output_dir: Path, index: PostIndex, layout: Layout) -> int:
    count = 0
    for params in generate_static_params(index):
        segments = params["slug"]
        target = output_dir.joinpath("posts", *segments[:-1], f"{segments[-1]}.html")
        write_text(target, render_post_page(params, index, layout))
        count += 1
    return count


def build_about(output_dir: Path, layout: Layout) -> None:
    about_html = render_about(layout)
    if about_html is not None:
        write_text(output_dir / "about.html", about_html)


def build_404(output_dir: Path, layout: Layout) -> None:
    write_text(output_dir / "404.html", render_not_found(layout))
