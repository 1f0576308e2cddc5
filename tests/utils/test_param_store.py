import pytest

from quire.utils.param_store import ParamStore


class TestContainsFlag:
    def test_flag_is_consumed(self) -> None:
        params = ParamStore(["-ro", "a.txt"])
        assert params.contains_flag("-ro") is True
        assert params.remaining == ("a.txt",)
        assert params.contains_flag("-ro") is False

    def test_peek_does_not_consume(self) -> None:
        params = ParamStore(["-ro"])
        assert params.contains_flag("-ro", consume=False) is True
        assert len(params) == 1

    def test_exact_match_only(self) -> None:
        params = ParamStore(["-rox"])
        assert params.contains_flag("-ro") is False
        assert params.remaining == ("-rox",)

    def test_only_one_occurrence_is_consumed(self) -> None:
        params = ParamStore(["-ro", "-ro"])
        assert params.contains_flag("-ro") is True
        assert params.remaining == ("-ro",)


class TestTakeValue:
    def test_value_is_returned_and_consumed(self) -> None:
        params = ParamStore(["-lcpp", "a.txt"])
        assert params.take_value("l") == "cpp"
        assert params.take_value("l") is None
        assert params.remaining == ("a.txt",)

    def test_empty_value_is_not_absent(self) -> None:
        params = ParamStore(["-l"])
        assert params.take_value("l") == ""
        assert len(params) == 0

    def test_first_match_wins(self) -> None:
        params = ParamStore(["-lcpp", "-lpython"])
        assert params.take_value("l") == "cpp"
        assert params.remaining == ("-lpython",)

    def test_take_value_by_prefix(self) -> None:
        params = ParamStore(["a.txt", "-titleAdd=dev"])
        assert params.take_value_by_prefix("-titleAdd=") == "dev"
        assert params.take_value_by_prefix("-titleAdd=") is None
        assert list(params) == ["a.txt"]


class TestTakeNumeric:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("-n42", 42),
            ("-n-3", -3),
            ("-n0", 0),
            ("-n9223372036854775807", 9223372036854775807),
            ("-n-9223372036854775808", -9223372036854775808),
        ],
    )
    def test_valid_numbers(self, token: str, expected: int) -> None:
        params = ParamStore([token])
        assert params.take_numeric("n") == expected
        assert len(params) == 0

    @pytest.mark.parametrize(
        "token",
        [
            "-nabc",
            "-n",
            "-n4x",
            "-n9223372036854775808",
            "-n-9223372036854775809",
            "-n1_000",
            "-n+5",
            "-n 5",
            "-n5 ",
            "-n\u0663",
            "-n\uff15",
        ],
    )
    def test_invalid_numbers_are_absent_and_consumed(self, token: str) -> None:
        params = ParamStore([token, "a.txt"])
        assert params.take_numeric("n") is None
        assert params.remaining == ("a.txt",)

    def test_missing_flag(self) -> None:
        params = ParamStore(["a.txt"])
        assert params.take_numeric("n") is None
        assert params.remaining == ("a.txt",)


class TestStripIgnored:
    def test_flag_and_following_argument_are_removed(self) -> None:
        params = ParamStore(["-notepadStyleCmdline", "-z", "notepad.exe", "a.txt"])
        params.strip_ignored()
        assert params.remaining == ("-notepadStyleCmdline", "a.txt")

    def test_trailing_flag(self) -> None:
        params = ParamStore(["a.txt", "-z"])
        params.strip_ignored("-z")
        assert params.remaining == ("a.txt",)


def test_drain_empties_the_store() -> None:
    params = ParamStore(["a.txt", "b.txt"])
    assert params.drain() == ["a.txt", "b.txt"]
    assert len(params) == 0
    assert params.drain() == []
