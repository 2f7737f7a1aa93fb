from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import ConfigValues, load_config, resolve_analytics
from .content import ContentError, load_posts
from .pages import Layout, build_404, build_about, build_index, build_posts, load_about_page
from .posts import PostIndex
from .render import clean_output_dir, copy_static, read_template, write_highlight_css, write_nojekyll, write_text

DEFAULT_TAGLINE = "Thoughts on development, architecture, and the craft of building software."


def build_site(args: argparse.Namespace) -> int:
    content_dir = Path(args.content)
    static_dir = Path(args.static)
    templates_dir = Path(args.templates)
    output_dir = Path(args.output)
    project_root = Path.cwd()

    if not content_dir.exists():
        print(f"Content directory not found: {content_dir}", file=sys.stderr)
        sys.exit(1)
    template_path = templates_dir / "base.html"
    if not template_path.exists():
        print(f"Template not found: {template_path}", file=sys.stderr)
        sys.exit(1)

    try:
        index = PostIndex(load_posts(content_dir))
    except ContentError as exc:
        print(f"Content error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Loaded {len(index)} posts.")

    layout = Layout(
        base_template=read_template(template_path),
        site_name=args.site_name,
        site_description=args.site_description,
        tagline=args.tagline,
        author_name=args.author_name,
        github_url=args.github_url,
        theme_default=args.theme_default,
        theme_toggle=args.theme_toggle,
        analytics_html=resolve_analytics(args),
        about=load_about_page(content_dir / "pages" / "about.md"),
    )

    if args.clean:
        clean_output_dir(output_dir, project_root)
    output_dir.mkdir(parents=True, exist_ok=True)

    if static_dir.exists():
        copy_static(static_dir, output_dir)
    write_highlight_css(output_dir, args.highlight_style)

    custom_domain = (args.custom_domain or "").strip()
    if custom_domain:
        write_text(output_dir / "CNAME", f"{custom_domain}\n")
    if args.write_nojekyll:
        write_nojekyll(output_dir)

    build_index(output_dir, index, layout)
    count = build_posts(output_dir, index, layout)
    build_about(output_dir, layout)
    if args.enable_404:
        build_404(output_dir, layout)
    return count


def build_parser(argv: list[str] | None = None) -> argparse.ArgumentParser:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    cfg = ConfigValues(load_config(Path(pre_args.config)))

    parser = argparse.ArgumentParser(description="Static site generator for a Markdown blog.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--content",
        default=cfg.get_str("content", "content"),
        help="Content directory holding posts/ and pages/.",
    )
    parser.add_argument("--static", default=cfg.get_str("static", "static"), help="Directory containing static assets.")
    parser.add_argument(
        "--templates",
        default=cfg.get_str("templates", "templates"),
        help="Directory containing base.html.",
    )
    parser.add_argument("--output", default=cfg.get_str("output", "dist"), help="Output directory for the site.")
    parser.add_argument("--site-name", default=cfg.get_str("site_name", "Blog"), help="Site title.")
    parser.add_argument(
        "--site-description",
        default=cfg.get_str("site_description", "A personal blog."),
        help="Default meta description.",
    )
    parser.add_argument(
        "--tagline",
        default=cfg.get_str("tagline", DEFAULT_TAGLINE),
        help="Text shown under the home page heading.",
    )
    parser.add_argument(
        "--author-name",
        default=cfg.get_str("author_name", ""),
        help="Author name shown below every post.",
    )
    parser.add_argument(
        "--github-url",
        default=cfg.get_str("github_url", ""),
        help="GitHub profile linked from the header and post footer.",
    )
    parser.add_argument(
        "--theme-default",
        choices=["light", "dark"],
        default=cfg.get_str("theme_default", "dark"),
        help="Theme used before the visitor picks one.",
    )
    parser.add_argument(
        "--theme-toggle",
        action=argparse.BooleanOptionalAction,
        default=cfg.get_bool("theme_toggle", True),
        help="Show the light/dark toggle button.",
    )
    parser.add_argument(
        "--highlight-style",
        default=cfg.get_str("highlight_style", "default"),
        help="Pygments style for code blocks.",
    )
    parser.add_argument(
        "--custom-domain",
        default=cfg.get_str("custom_domain", ""),
        help="Custom domain to write into CNAME.",
    )
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=cfg.get_bool("clean", True),
        help="Clean output directory before build.",
    )
    parser.add_argument(
        "--enable-404",
        action=argparse.BooleanOptionalAction,
        default=cfg.get_bool("enable_404", True),
        help="Generate 404.html.",
    )
    parser.add_argument(
        "--write-nojekyll",
        action=argparse.BooleanOptionalAction,
        default=cfg.get_bool("write_nojekyll", True),
        help="Write .nojekyll in the output directory.",
    )
    parser.add_argument(
        "--analytics-file",
        default=cfg.get_str("analytics_file", ""),
        help="Path to analytics HTML snippet file.",
    )
    parser.add_argument(
        "--analytics-html",
        default=cfg.get_str("analytics_html", ""),
        help="Inline analytics HTML snippet.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser(argv).parse_args(argv)
    start = time.perf_counter()
    count = build_site(args)
    elapsed = time.perf_counter() - start
    print(f"Built {count} post pages.")
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {args.output}")
