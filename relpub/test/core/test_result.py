"""Tests for relpub.core.result module."""

import pytest

from relpub.core.result import Err, Ok, Result


# =============================================================================
# Construction and equality
# =============================================================================


class TestOk:
    """Tests for the Ok variant."""

    def test_equality(self) -> None:
        """Ok values compare by their payload."""
        assert Ok(42) == Ok(42)
        assert Ok(42) != Ok(43)
        assert Ok(42) != Err(42)

    def test_repr(self) -> None:
        """Test repr shows the payload."""
        assert repr(Ok("x")) == "Ok('x')"


class TestErr:
    """Tests for the Err variant."""

    def test_repr(self) -> None:
        """Test repr shows the error."""
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        """Results cannot be mutated after creation."""
        err = Err("boom")
        with pytest.raises(AttributeError):
            err.error = "other"  # type: ignore[misc]


# =============================================================================
# Narrowing
# =============================================================================


class TestNarrowing:
    """Callers narrow with isinstance or structural pattern matching."""

    def test_isinstance(self) -> None:
        """isinstance separates the two variants."""
        ok: Result[int, str] = Ok(1)
        err: Result[int, str] = Err("x")
        assert isinstance(ok, Ok) and not isinstance(ok, Err)
        assert isinstance(err, Err) and not isinstance(err, Ok)

    def test_pattern_matching(self) -> None:
        """match/case binds the payload of the matching variant."""
        result: Result[int, str] = Err("bad")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "bad"
