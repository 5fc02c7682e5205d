from dataclasses import dataclass

from faultline import (
    FaultlineConfig,
    current_exception_diagnostic_information,
    diagnostic_information,
    exception,
    get_registry,
    on_error,
    set_config,
)


@dataclass(frozen=True)
class Info:
    value: int


@dataclass(frozen=True)
class Blob:
    data: str


class MyError(Exception):
    pass


def test_dump_lists_episode_exception_and_payloads() -> None:
    try:
        with on_error(Info(42)):
            raise MyError("broken")
    except MyError:
        text = current_exception_diagnostic_information()

    episode = get_registry().current_episode()
    lines = text.splitlines()
    assert lines[0] == f"Episode {episode.id} (active)"
    assert lines[1] == f"  exception: {__name__}.MyError: broken"
    assert lines[2] == "  Info: Info(value=42)"
    assert text.endswith("\n")


def test_dump_without_episode() -> None:
    assert diagnostic_information() == "No failure episode\n"


def test_dump_of_untagged_exception_shows_exception_only() -> None:
    text = diagnostic_information(ValueError("plain"))

    assert text.splitlines() == ["No failure episode", "  exception: builtins.ValueError: plain"]


def test_dump_of_resolved_episode() -> None:
    try:
        raise exception(MyError(), Info(1))
    except MyError:
        get_registry().end_episode()

    text = diagnostic_information()

    assert "(resolved)" in text.splitlines()[0]
    assert "  Info: Info(value=1)" in text


def test_long_payloads_are_truncated() -> None:
    set_config(FaultlineConfig(diagnostic_value_max_length=20))

    try:
        raise exception(MyError(), Blob("x" * 100))
    except MyError as e:
        text = diagnostic_information(e)

    payload_line = text.splitlines()[-1]
    assert payload_line.startswith("  Blob: ")
    assert payload_line.endswith("...")
    assert len(payload_line) == len("  Blob: ") + 20
