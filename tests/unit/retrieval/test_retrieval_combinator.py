from dataclasses import dataclass

import pytest

from faultline import (
    Attempt,
    FaultlineUsageError,
    MismatchError,
    attempt,
    exception,
    get_registry,
    on_error,
    retrieve,
    unwrap,
)


@dataclass(frozen=True)
class Info:
    value: int


@dataclass(frozen=True)
class Label:
    value: str


class MyError(Exception):
    pass


def test_first_attempt_with_all_payloads_wins() -> None:
    with retrieve(Info, Label) as info:
        try:
            raise exception(MyError(), Info(1))
        except MyError:
            result = info.match(
                Attempt((Info, Label), lambda i, label: "both"),
                Attempt((Info,), lambda i: f"info {i.value}"),
                Attempt((), lambda: "nothing"),
            )

    assert result.matched
    assert result.value == "info 1"


def test_match_uses_caught_exception_tag() -> None:
    with retrieve(Info) as info:
        try:
            with on_error(Info(4)):
                raise MyError()
        except MyError as e:
            result = info.match(Attempt((Info,), lambda i: i.value), error=e)

    assert unwrap(result) == 4


def test_no_match_reports_attempts_and_unwrap_raises() -> None:
    with retrieve(Info, Label) as info:
        try:
            raise exception(MyError())
        except MyError:
            result = info.match(Attempt((Info,), lambda i: i), Attempt((Label,), lambda label: label))

    assert not result
    assert result.attempted == ["(Info)", "(Label)"]
    with pytest.raises(MismatchError) as caught:
        unwrap(result)
    assert caught.value.error_code == "NO_MATCH"


def test_undeclared_types_are_rejected() -> None:
    info = retrieve(Info)

    with pytest.raises(FaultlineUsageError):
        info.match(Attempt((Label,), lambda label: label))


def test_attempt_decorator() -> None:
    @attempt(Info)
    def describe(i: Info) -> str:
        return f"info={i.value}"

    with retrieve(Info) as info:
        try:
            raise exception(MyError(), Info(8))
        except MyError:
            assert unwrap(info.match(describe)) == "info=8"


def test_exit_ends_consumed_episode() -> None:
    with retrieve(Info):
        try:
            raise exception(MyError(), Info(1))
        except MyError:
            pass

    registry = get_registry()
    assert registry.current_episode() is None
    assert registry.last_ended_episode().store.get(Info) == Info(1)


def test_ended_episode_is_visible_only_when_newer_than_combinator() -> None:
    try:
        raise exception(MyError(), Info(1))
    except MyError:
        get_registry().end_episode()

    info = retrieve(Info)

    assert not info.match(Attempt((Info,), lambda i: i)).matched

    try:
        raise exception(MyError(), Info(2))
    except MyError:
        get_registry().end_episode()

    assert unwrap(info.match(Attempt((Info,), lambda i: i.value))) == 2


def test_exit_with_exception_leaves_episode_active() -> None:
    with pytest.raises(MyError):
        with retrieve(Info):
            raise exception(MyError(), Info(1))

    assert get_registry().current_episode() is not None
