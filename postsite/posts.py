from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Sequence

from .content import DuplicateSlugError, Post, parse_post_date


class PostNotFound(LookupError):
    """Raised by the detail view when no post matches the requested slug."""

    def __init__(self, slug: str):
        super().__init__(f"No post with slug '{slug}'")
        self.slug = slug


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    # sorted() keeps equal keys in input order, reverse=True included.
    return sorted(posts, key=lambda post: parse_post_date(post.date), reverse=True)


class PostIndex:
    """Read-only slug lookup over a post collection, built once per load."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = tuple(posts)
        self._by_slug: dict[str, Post] = {}
        for post in self._posts:
            existing = self._by_slug.get(post.slug_as_params)
            if existing is not None:
                raise DuplicateSlugError(
                    f"{post.id}: slug '{post.slug_as_params}' already used by {existing.id}"
                )
            self._by_slug[post.slug_as_params] = post

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    @property
    def posts(self) -> tuple[Post, ...]:
        return self._posts

    def get(self, slug: str) -> Optional[Post]:
        return self._by_slug.get(slug)


def join_slug(params: Optional[Mapping[str, Sequence[str]]]) -> Optional[str]:
    if not params:
        return None
    segments = params.get("slug")
    if not segments:
        return None
    return "/".join(segments)


def get_post_from_params(params: Optional[Mapping[str, Sequence[str]]], index: PostIndex) -> Optional[Post]:
    slug = join_slug(params)
    if slug is None:
        return None
    return index.get(slug)


def generate_metadata(params: Optional[Mapping[str, Sequence[str]]], index: PostIndex) -> dict:
    post = get_post_from_params(params, index)
    if post is None:
        return {}
    return {
        "title": post.title,
        "description": post.description,
    }


def generate_static_params(posts: Iterable[Post]) -> list[dict]:
    return [{"slug": post.slug_as_params.split("/")} for post in posts]
