from opito.core.markdown import load_frontmatter, render_markdown, split_frontmatter


def test_split_frontmatter_returns_block_and_body() -> None:
    parts = split_frontmatter("---\ndescription: Hello\n---\n\nBody text\n")

    assert parts == ("description: Hello", "\nBody text\n")


def test_split_frontmatter_accepts_crlf_line_endings() -> None:
    parts = split_frontmatter("---\r\ndescription: Hello\r\n---\r\nBody\r\n")

    assert parts is not None
    assert load_frontmatter(parts[0]) == {"description": "Hello"}


def test_split_frontmatter_requires_closing_delimiter() -> None:
    assert split_frontmatter("---\ndescription: Hello\nBody text\n") is None
    assert split_frontmatter("no frontmatter at all") is None
    assert split_frontmatter("---\ndescription: Hello\n---") is None


def test_load_frontmatter_degrades_to_empty_mapping() -> None:
    assert load_frontmatter("description: [unclosed") == {}
    assert load_frontmatter("just a string") == {}
    assert load_frontmatter("") == {}
    assert load_frontmatter("- a\n- b") == {}


def test_load_frontmatter_keeps_unknown_keys() -> None:
    data = load_frontmatter("description: Hi\nallowed-tools: Bash(git:*)\nmodel: sonnet")

    assert data == {"description": "Hi", "allowed-tools": "Bash(git:*)", "model": "sonnet"}


def test_render_markdown_layout() -> None:
    text = render_markdown({"description": "Review: staged diff", "tools": ["read", "grep"]}, "Look closely.")

    assert text.startswith("---\n")
    assert text.endswith("\n\nLook closely.\n")
    front, body = split_frontmatter(text)  # type: ignore[misc]
    assert load_frontmatter(front) == {"description": "Review: staged diff", "tools": ["read", "grep"]}
    assert body.strip() == "Look closely."


def test_render_markdown_keeps_long_description_on_one_line() -> None:
    description = "word " * 60
    text = render_markdown({"description": description.strip()}, "Body")

    front, _ = split_frontmatter(text)  # type: ignore[misc]
    assert len(front.splitlines()) == 1
    assert load_frontmatter(front)["description"] == description.strip()
