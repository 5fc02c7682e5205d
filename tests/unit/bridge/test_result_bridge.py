from dataclasses import dataclass

import pytest

from faultline import (
    ErrorId,
    FaultlineUsageError,
    Result,
    ResultError,
    catch,
    dispatch,
    exception,
    exception_to_result,
    get_registry,
    handler,
    match,
    new_error,
    on_error,
    try_handle_some,
)
from faultline.episodes import episode_id_of


@dataclass(frozen=True)
class Info:
    value: int


class MyError(Exception):
    pass


def test_ok_result_exposes_value() -> None:
    result = Result.ok(5)

    assert result.is_ok
    assert result
    assert result.value() == 5
    assert result.value_or(0) == 5
    assert not result.error_id
    assert repr(result) == "Result.ok(5)"


def test_failure_defaults_to_new_episode() -> None:
    result = Result.failure()

    assert result.is_failure
    assert not result
    assert result.error_id.value == get_registry().current_episode().id
    assert result.value_or("fallback") == "fallback"


def test_failure_reuses_active_episode() -> None:
    error_id = new_error(Info(1))

    assert Result.failure().error_id == error_id


def test_value_of_failure_without_category_raises_result_error() -> None:
    result = Result.failure(new_error())

    with pytest.raises(ResultError) as caught:
        result.value()

    assert caught.value.error_id == result.error_id.value
    assert episode_id_of(caught.value) == result.error_id.value


def test_value_of_failure_raises_category_with_same_episode() -> None:
    error_id = new_error(Info(42))
    result = Result.failure(error_id, category=MyError("bad"))

    outcome = dispatch(result.value, handler(catch(MyError), match(Info, 42))(lambda e, i: str(e)))

    assert outcome == "bad"


def test_try_handle_some_returns_ok_results_untouched() -> None:
    result = Result.ok("fine")

    assert try_handle_some(lambda: result, lambda: "unused") is result


def test_try_handle_some_handles_failed_result_payloads() -> None:
    def compute() -> Result:
        return Result.failure(new_error(Info(42)))

    result = try_handle_some(compute, handler(match(Info, 42))(lambda i: i.value + 1))

    assert result.value() == 43
    assert get_registry().current_episode() is None


def test_try_handle_some_matches_category_of_failed_result() -> None:
    def compute() -> Result:
        return Result.failure(category=MyError("category"))

    result = try_handle_some(
        compute,
        handler(catch(KeyError))(lambda e: "wrong"),
        handler(catch(MyError))(lambda e: Result.ok(str(e))),
    )

    assert result.value() == "category"


def test_try_handle_some_returns_unhandled_failure() -> None:
    def compute() -> Result:
        return Result.failure(new_error(Info(1)))

    result = try_handle_some(compute, handler(match(Info, 2))(lambda i: i))

    assert result.is_failure
    assert get_registry().current_episode().id == result.error_id.value


def test_try_handle_some_handles_raised_exceptions() -> None:
    def compute() -> Result:
        raise exception(MyError(), Info(9))

    result = try_handle_some(compute, handler(MyError, Info)(lambda e, i: i.value))

    assert result.value() == 9


def test_try_handle_some_reraises_unmatched_exceptions() -> None:
    def compute() -> Result:
        raise MyError()

    with pytest.raises(MyError):
        try_handle_some(compute, handler(catch(KeyError))(lambda e: None))


def test_try_handle_some_requires_result() -> None:
    with pytest.raises(FaultlineUsageError):
        try_handle_some(lambda: 3)


def test_exception_to_result_keeps_episode_payloads() -> None:
    def compute() -> None:
        with on_error(Info(7)):
            raise MyError("converted")

    result = exception_to_result(compute)

    assert result.is_failure
    assert isinstance(result.category, MyError)
    assert get_registry().episode(result.error_id.value).store.get(Info) == Info(7)
    assert repr(result) == f"Result.failure({result.error_id.value}, MyError)"


def test_exception_to_result_wraps_plain_values() -> None:
    assert exception_to_result(lambda: 4).value() == 4
    assert isinstance(exception_to_result(lambda: Result.ok(1)), Result)
    assert ErrorId() == Result.ok().error_id
