import textwrap

import pytest

from postsite.content import Post
from postsite.pages import AboutPage, Layout

BASE_TEMPLATE = (
    '<html data-theme="{{theme_default}}"><head><title>{{title}}</title>'
    '<meta name="description" content="{{description}}"></head>'
    "<body>{{header}}<main>{{content}}</main>{{analytics}}</body></html>"
)


@pytest.fixture
def make_post():
    def _make(slug="post", date="2025-01-01", **overrides):
        fields = {
            "id": f"posts/{slug}.md",
            "title": slug.replace("-", " ").title(),
            "date": date,
            "slug": f"/posts/{slug}",
            "slug_as_params": slug,
            "body": f"<p>Body of {slug}</p>",
        }
        fields.update(overrides)
        return Post(**fields)

    return _make


@pytest.fixture
def layout():
    return Layout(
        base_template=BASE_TEMPLATE,
        site_name="Test Blog",
        site_description="Notes and things",
        tagline="Thoughts on building software.",
        author_name="Martin Duchev",
        github_url="https://github.com/e-goat",
        analytics_html="<script>track()</script>",
        about=AboutPage(title="About", content="<p>About me.</p>"),
    )


def write_file(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    write_file(
        root / "posts" / "laravel-repository-pattern.mdx",
        """
        ---
        title: The Repository Pattern in Laravel
        description: Keeping Eloquent out of controllers.
        date: 2025-06-02
        tags: [laravel, php]
        ---
        Repositories give queries one home. See ![diagram](images/repo.png).
        """,
    )
    write_file(
        root / "posts" / "hello-world.md",
        """
        ---
        title: Hello, World
        date: 2025-01-01
        ---
        First post.
        """,
    )
    write_file(
        root / "posts" / "2024" / "index.md",
        """
        ---
        title: Year in Review
        date: "2024-12-31T18:00:00Z"
        ---
        A look back.
        """,
    )
    write_file(
        root / "pages" / "about.md",
        """
        ---
        title: About Me
        ---
        I write code.
        """,
    )
    return root
