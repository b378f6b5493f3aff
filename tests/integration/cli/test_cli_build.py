"""Integration tests for the CLI (load -> validate -> assemble -> export)"""

import json

import pytest
from typer.testing import CliRunner

from mdblog.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so relative paths are isolated."""
    monkeypatch.chdir(tmp_path)


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.output


def test_build_cmd_runs_full_pipeline(tmp_path, posts_dir, write_post):
    """build writes .mdx + .json per published post and the collection indexes."""
    write_post("first.md", date="2024-01-15")
    write_post("second.md", date="2024-01-25")
    write_post("draft.md", draft=True)

    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    dist = tmp_path / "dist"
    assert sorted(p.name for p in dist.glob("*.mdx")) == ["first.mdx", "second.mdx"]
    index = json.loads((dist / "_index.json").read_text())
    assert [e["slug"] for e in index] == ["second", "first"]
    assert "1 draft(s) skipped" in result.output


def test_build_cmd_rejected_posts_do_not_abort(tmp_path, posts_dir, write_post):
    write_post("good.md")
    write_post("untitled.md", raw="---\ndescription: d\npublishDate: 2024-01-01\nauthor: a\n---\nBody\n")

    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "untitled: missing-field (title)" in result.output
    assert (tmp_path / "dist" / "good.mdx").exists()
    assert not (tmp_path / "dist" / "untitled.mdx").exists()


def test_build_cmd_duplicate_slug_aborts(tmp_path, posts_dir, write_post):
    write_post("Hello World.md")
    write_post("hello_world.md")

    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 1
    assert "Hello World" in result.output
    assert "hello_world" in result.output
    assert not (tmp_path / "dist").exists()


def test_build_cmd_output_format_md(tmp_path, posts_dir, write_post):
    write_post("post.md")
    result = runner.invoke(app, [
        "build", str(posts_dir), "--out-dir", str(tmp_path / "dist"), "--output-format", "md",
    ])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "dist" / "post.md").exists()


def test_build_cmd_invalid_option_value(tmp_path, posts_dir, write_post):
    write_post("post.md")
    result = runner.invoke(app, ["build", str(posts_dir), "--excerpt-length", "0"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_build_cmd_missing_path(tmp_path):
    result = runner.invoke(app, ["build", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Content path not found" in result.output


def test_build_cmd_uses_content_dir_setting(tmp_path, posts_dir, write_post):
    write_post("post.md")
    (tmp_path / "config.yaml").write_text(f"content_dir: {posts_dir.as_posix()}\noutput_dir: out\n")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "post.mdx").exists()


def test_check_cmd_ok(posts_dir, write_post):
    write_post("post.md")
    result = runner.invoke(app, ["check", str(posts_dir)])
    assert result.exit_code == 0, result.output
    assert "OK - 1 post(s)" in result.output


def test_check_cmd_fails_on_rejection(posts_dir, write_post):
    write_post("post.md", date="someday")
    result = runner.invoke(app, ["check", str(posts_dir)])
    assert result.exit_code == 1
    assert "bad-date (publishDate)" in result.output


def test_list_cmd_orders_newest_first(posts_dir, write_post):
    write_post("older.md", date="2024-01-15")
    write_post("newer.md", date="2024-01-20", tags="[Astro]")
    result = runner.invoke(app, ["list", str(posts_dir)])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert "newer" in lines[0] and "January 20, 2024" in lines[0]
    assert "older" in lines[1]


def test_list_cmd_filters_by_tag(posts_dir, write_post):
    write_post("older.md", date="2024-01-15")
    write_post("newer.md", date="2024-01-20", tags="[Astro]")
    result = runner.invoke(app, ["list", str(posts_dir), "--tag", "astro"])
    assert result.exit_code == 0, result.output
    assert "newer" in result.output
    assert "older" not in result.output


def test_build_cmd_duplicate_slug_lists_rejections_too(tmp_path, posts_dir, write_post):
    write_post("Hello World.md")
    write_post("hello_world.md")
    write_post("undated.md", date="someday")

    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 1
    assert "undated: bad-date (publishDate)" in result.output
    assert "duplicate slugs" in result.output


def test_build_cmd_keeps_sidecars_for_index_and_tags_posts(tmp_path, posts_dir, write_post):
    write_post("index.md", body="Welcome page.")
    write_post("tags.md", body="All the tags.")

    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    dist = tmp_path / "dist"
    assert json.loads((dist / "index.json").read_text())["slug"] == "index"
    assert json.loads((dist / "tags.json").read_text())["slug"] == "tags"
    assert {e["slug"] for e in json.loads((dist / "_index.json").read_text())} == {"index", "tags"}


def test_show_cmd_prints_post(posts_dir, write_post):
    write_post("hello.md", title="Hello There", tags="[Web-Design]")
    result = runner.invoke(app, ["show", "hello", "--path", str(posts_dir)])
    assert result.exit_code == 0, result.output
    assert "Hello There" in result.output
    assert "web-design" in result.output
    assert "January 15, 2024" in result.output


def test_show_cmd_unknown_slug(posts_dir, write_post):
    write_post("hello.md")
    result = runner.invoke(app, ["show", "missing", "--path", str(posts_dir)])
    assert result.exit_code == 1
    assert "No published post with slug 'missing'" in result.output
