"""Root test configuration: post-writing helpers shared by unit and integration tests"""

import pytest


POST_TEMPLATE = """\
---
title: {title}
description: A short description.
publishDate: {date}
author: Jane Doe
tags: {tags}
draft: {draft}
---

{body}
"""


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    d = tmp_path / "content" / "blog"
    d.mkdir(parents=True)
    return d


@pytest.fixture(name="write_post")
def write_post_fixture(posts_dir):
    """Factory writing a post with valid frontmatter; returns its path."""
    def _write(name: str, date: str = "2024-01-15", title: str = None, tags: str = "[python, web]",
               draft: bool = False, body: str = "Hello world.", raw: str = None):
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = raw if raw is not None else POST_TEMPLATE.format(
            title=title or name.rsplit(".", 1)[0], date=date, tags=tags,
            draft=str(draft).lower(), body=body,
        )
        path.write_text(text, encoding="utf-8")
        return path
    return _write
