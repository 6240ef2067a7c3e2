from opito.command import CommandRecord, CopilotCommandRecord
from opito.convert import Converter, CopilotConverter, DroidConverter


def make_record(**frontmatter) -> CommandRecord:  # type: ignore[no-untyped-def]
    return CommandRecord(
        name="review",
        description="Review the diff",
        content="Look at it.",
        frontmatter={"description": "Review the diff", **frontmatter},
        source_path="/abs/review.md",
    )


def test_base_converter_narrows_frontmatter() -> None:
    record = make_record(**{"allowed-tools": "Bash", "model": "sonnet"})

    converted = Converter().convert(record)

    assert converted.frontmatter == {"description": "Review the diff"}
    assert converted.name == "review"
    assert converted.content == "Look at it."
    assert converted.source_path == "/abs/review.md"
    assert record.frontmatter["model"] == "sonnet"


def test_to_copilot_lifts_extended_fields() -> None:
    record = make_record(agent="agent", model="gpt-4o", tools=["search", "edit"], **{"argument-hint": "<file>"})

    converted = CopilotConverter("to").convert(record)

    assert isinstance(converted, CopilotCommandRecord)
    assert converted.kind == "prompt"
    assert converted.agent == "agent"
    assert converted.model == "gpt-4o"
    assert converted.tools == ["search", "edit"]
    assert converted.argument_hint == "<file>"
    assert converted.frontmatter == {"description": "Review the diff"}


def test_to_copilot_leaves_missing_fields_unset() -> None:
    converted = CopilotConverter("to").to_copilot(make_record(tools="not-a-list"))

    assert converted.agent is None
    assert converted.model is None
    assert converted.tools is None
    assert converted.argument_hint is None


def test_from_copilot_drops_copilot_only_fields() -> None:
    record = CopilotCommandRecord(
        name="planner",
        description="Plans",
        content="Plan it",
        kind="agent",
        agent="agent",
        model="gpt-4o",
        tools=["search"],
        argument_hint="<goal>",
    )

    converted = CopilotConverter("from").convert(record)

    assert type(converted) is CommandRecord
    assert converted.frontmatter == {"description": "Plans", "argument-hint": "<goal>"}


def test_merge_copilot_settings_does_not_mutate_input() -> None:
    record = make_record(model="sonnet")

    merged = CopilotConverter().merge_copilot_settings(record, model="gpt-4o", tools=["search"])

    assert merged.model == "gpt-4o"
    assert merged.tools == ["search"]
    assert merged.agent is None
    assert record.frontmatter["model"] == "sonnet"


def test_droid_converter_directions() -> None:
    record = make_record(**{"argument-hint": "<issue>", "allowed-tools": "Bash"})

    to_droid = DroidConverter("to").convert(record)
    from_droid = DroidConverter("from").convert(record)

    assert to_droid.frontmatter == {"description": "Review the diff", "argument-hint": "<issue>"}
    assert from_droid.frontmatter == {"description": "Review the diff"}
