from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .components import render_markdown

POST_SUFFIXES = {".md", ".mdx"}
REQUIRED_FIELDS = ("title", "date")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class ContentError(ValueError):
    """Raised when a content file cannot be turned into a post record."""


class DuplicateSlugError(ContentError):
    pass


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    date: str
    slug: str
    slug_as_params: str
    body: str
    description: Optional[str] = None
    tags: tuple[str, ...] = ()
    raw: str = ""


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    try:
        meta = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        raise ContentError(f"Invalid front matter: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ContentError("Front matter must be a mapping")
    body = "\n".join(lines[end + 1 :])
    return {str(key).strip().lower(): value for key, value in meta.items()}, body


def date_string(value: object) -> str:
    # YAML turns bare dates into date/datetime objects; keep the authored ISO form.
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value).strip()


def parse_tags(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return tuple(str(item).strip() for item in items if str(item).strip())


def flatten_path(rel_path: Path) -> str:
    flattened = rel_path.with_suffix("").as_posix()
    if flattened == "index":
        return ""
    if flattened.endswith("/index"):
        flattened = flattened[: -len("/index")]
    return flattened


def parse_post_date(value: str) -> dt.datetime:
    """Parse an ISO-8601 post date; naive values are read as UTC.

    Malformed values raise ``ValueError``.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def format_post_date(value: str) -> str:
    parsed = parse_post_date(value)
    # Fixed English names; strftime("%B") follows the process locale.
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def load_post(path: Path, content_dir: Path) -> Post:
    rel = path.relative_to(content_dir)
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"))
    missing = [key for key in REQUIRED_FIELDS if meta.get(key) in (None, "")]
    if missing:
        raise ContentError(f"{rel.as_posix()}: missing required field(s): {', '.join(missing)}")

    flattened = flatten_path(rel)
    slug_as_params = "/".join(flattened.split("/")[1:])
    if not slug_as_params:
        raise ContentError(f"{rel.as_posix()}: path does not produce a post slug")
    description = meta.get("description")
    return Post(
        id=rel.as_posix(),
        title=str(meta["title"]).strip(),
        date=date_string(meta["date"]),
        slug=f"/{flattened}",
        slug_as_params=slug_as_params,
        body=render_markdown(body),
        description=str(description).strip() if description else None,
        tags=parse_tags(meta.get("tags")),
        raw=body,
    )


def load_posts(content_dir: Path, collection: str = "posts") -> tuple[Post, ...]:
    posts_dir = content_dir / collection
    if not posts_dir.exists():
        return ()
    files = sorted(
        (path for path in posts_dir.rglob("*") if path.is_file() and path.suffix.lower() in POST_SUFFIXES),
        key=lambda p: p.as_posix(),
    )
    posts = []
    seen: dict[str, str] = {}
    for path in files:
        post = load_post(path, content_dir)
        if post.slug_as_params in seen:
            raise DuplicateSlugError(
                f"{post.id}: slug '{post.slug_as_params}' already used by {seen[post.slug_as_params]}"
            )
        seen[post.slug_as_params] = post.id
        posts.append(post)
    return tuple(posts)
