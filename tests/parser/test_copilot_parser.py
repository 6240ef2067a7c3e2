from pathlib import Path

import pytest

from opito.command import CommandRecord, CopilotCommandRecord
from opito.parser import CopilotParser
from tests.helpers import write_command


def make_parser(root: Path) -> CopilotParser:
    prompts = root / ".github" / "prompts"
    return CopilotParser(str(prompts), str(prompts / "instructions"), str(prompts / "agents"))


@pytest.mark.anyio
async def test_parse_all_reads_every_kind(tmp_path: Path) -> None:
    prompts = tmp_path / ".github" / "prompts"
    write_command(prompts, "review", "Review", suffix=".prompt.md", extra="agent: agent\nmodel: gpt-4o\ntools:\n  - search\n  - edit")
    write_command(prompts / "instructions", "style", "Style rules", suffix=".instructions.md")
    write_command(prompts / "agents", "planner", "Plans work", suffix=".agent.md", extra="argument-hint: <goal>")
    write_command(prompts, "ignored", "Wrong suffix")

    parser = make_parser(tmp_path)
    records = await parser.parse_all()

    assert [(r.name, r.kind) for r in records] == [
        ("review", "prompt"),
        ("style", "instruction"),
        ("planner", "agent"),
    ]
    review = records[0]
    assert review.agent == "agent"
    assert review.model == "gpt-4o"
    assert review.tools == ["search", "edit"]
    assert review.argument_hint is None
    assert records[2].argument_hint == "<goal>"


@pytest.mark.anyio
async def test_parse_kinds_individually(tmp_path: Path) -> None:
    prompts = tmp_path / ".github" / "prompts"
    write_command(prompts / "agents", "planner", "Plans work", suffix=".agent.md")

    parser = make_parser(tmp_path)

    assert await parser.parse_prompts() == []
    assert await parser.parse_instructions() == []
    assert [r.name for r in await parser.parse_agents()] == ["planner"]


def test_parse_file_accepts_single_tool_string() -> None:
    record = CopilotParser("p", "i", "a").parse_file(
        "---\ndescription: d\ntools: search\n---\nBody\n", "x.prompt.md", "/abs/x.prompt.md"
    )

    assert record is not None
    assert record.name == "x"
    assert record.tools == ["search"]


@pytest.mark.anyio
async def test_write_prompt_round_trips_extended_fields(tmp_path: Path) -> None:
    parser = make_parser(tmp_path)
    record = CopilotCommandRecord(
        name="review",
        description="Review",
        content="Review the diff",
        agent="agent",
        model="gpt-4o",
        tools=["search"],
        argument_hint="<file>",
    )

    path = await parser.write_prompt(record)

    assert path.endswith("review.prompt.md")
    parsed = (await parser.parse_prompts())[0]
    assert parsed.frontmatter == {
        "description": "Review",
        "agent": "agent",
        "model": "gpt-4o",
        "tools": ["search"],
        "argument-hint": "<file>",
    }
    assert await parser.prompt_exists("review") is True
    assert await parser.instruction_exists("review") is False


@pytest.mark.anyio
async def test_write_omits_unset_fields(tmp_path: Path) -> None:
    parser = make_parser(tmp_path)

    await parser.write_instruction(CommandRecord(name="style", description="Style", content="Be terse"))

    text = (tmp_path / ".github" / "prompts" / "instructions" / "style.instructions.md").read_text(encoding="utf-8")
    assert text == "---\ndescription: Style\n---\n\nBe terse\n"
    assert await parser.instruction_exists("style") is True


@pytest.mark.anyio
async def test_write_command_dispatches_on_kind(tmp_path: Path) -> None:
    parser = make_parser(tmp_path)

    await parser.write_command(CopilotCommandRecord(name="planner", description="P", content="Plan", kind="agent"))
    await parser.write_command(CommandRecord(name="plain", description="Plain", content="Body"))

    assert await parser.agent_exists("planner") is True
    assert await parser.command_exists("planner", "agent") is True
    assert await parser.command_exists("plain") is True
    assert await parser.write_agent(CommandRecord(name="x", description="", content="y"))
    assert await parser.agent_exists("x") is True


@pytest.mark.anyio
async def test_each_kind_writes_its_own_fields(tmp_path: Path) -> None:
    parser = make_parser(tmp_path)
    record = CopilotCommandRecord(
        name="full",
        description="Full",
        content="Body",
        agent="agent",
        model="gpt-4o",
        tools=["search"],
        argument_hint="<x>",
    )

    await parser.write_instruction(record)
    await parser.write_agent(record)

    instruction = (await parser.parse_instructions())[0]
    agent = (await parser.parse_agents())[0]
    assert instruction.frontmatter == {"description": "Full", "agent": "agent"}
    assert agent.frontmatter == {"description": "Full", "agent": "agent", "model": "gpt-4o", "tools": ["search"]}


@pytest.mark.anyio
async def test_exists_checks_without_directories(tmp_path: Path) -> None:
    parser = make_parser(tmp_path / "missing")

    assert await parser.prompt_exists("review") is False
    assert await parser.instruction_exists("review") is False
    assert await parser.agent_exists("review") is False
    for kind in ("prompt", "instruction", "agent"):
        assert await parser.command_exists("review", kind) is False  # type: ignore[arg-type]
