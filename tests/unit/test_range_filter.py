"""
Unit tests for range filters: endpoint bounds, open/closed handling,
distance checks, allow-list and coercion entry points.

Includes property-based testing with hypothesis for the boundary arithmetic.
"""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from structlog.testing import capture_logs

from paramfilter.errors import ErrorKind, invalid_param
from paramfilter.ranges import Range, int32_range, int64_range, uint32_range
from paramfilter.ranges.domains import (
    MAX_INT32,
    MAX_INT64,
    MAX_UINT64,
    MIN_INT32,
    MIN_INT64,
)


def error_of(flt, text):
    result = flt.run("r", text)
    assert result.is_err(), f"expected an error for {text!r}, got {result!r}"
    return str(result.unwrap_err())


def passes(flt, text):
    return flt.run("r", text).is_ok()


class TestRunEntry:
    """Tests for the run() coercion entry"""

    def test_none_passes_through(self):
        assert int32_range().left_min(5).run("r", None).unwrap() is None

    def test_text_is_parsed(self):
        assert int32_range().run("r", " [1,10) ").unwrap() == Range(1, 10, True, False)

    def test_prebuilt_range_is_accepted(self):
        value = Range(1, 2, False, True)
        assert int32_range().run("r", value).unwrap() == value

    def test_prebuilt_range_out_of_domain(self):
        assert error_of(int32_range(), Range(MAX_INT32 + 1, 0)) == "InvalidParam:r:NotInt32Range"

    def test_non_ascii_digits_are_not_a_range(self):
        assert error_of(int32_range(), "[١,٢]") == "InvalidParam:r:NotInt32Range"

    @pytest.mark.parametrize("value", [5, 1.5, ["1", "2"], (1, 2), b"[1,2]"])
    def test_other_shapes_are_rejected(self, value):
        assert error_of(int32_range(), value) == "InvalidParam:r:NotInt32Range"

    def test_bad_text(self):
        assert error_of(int32_range(), "[a,b]") == "InvalidParam:r:NotInt32Range"
        assert error_of(uint32_range(), "[1,2") == "InvalidParam:r:NotUint32Range"


class TestAllowList:

    def test_allowed_value_bypasses_parsing(self):
        flt = int32_range().allow("any").left_min(5).build()
        assert flt.run("r", "any").unwrap() == "any"

    def test_allowed_value_is_matched_after_trim(self):
        flt = int32_range().allow("all").build()
        assert flt.run("r", "  all\n").unwrap() == "all"

    def test_other_text_still_validated(self):
        flt = int32_range().allow("any").left_min(5).build()
        assert error_of(flt, "[1,10]") == "InvalidParam:r:LeftTooSmall"


class TestLeftBounds:

    def test_left_min_closed(self):
        flt = int32_range().left_min(5).build()
        assert passes(flt, "[5,10]")
        assert error_of(flt, "[4,10]") == "InvalidParam:r:LeftTooSmall"

    def test_left_min_open_steps_threshold_down(self):
        flt = int32_range().left_min(5).build()
        assert passes(flt, "(4,10]")
        assert error_of(flt, "(3,10]") == "InvalidParam:r:LeftTooSmall"

    def test_left_max(self):
        flt = int32_range().left_max(5).build()
        assert passes(flt, "[5,10]")
        assert passes(flt, "(4,10]")
        assert error_of(flt, "(5,10]") == "InvalidParam:r:LeftTooLarge"
        assert error_of(flt, "[6,10]") == "InvalidParam:r:LeftTooLarge"

    def test_left_larger_than(self):
        flt = int32_range().left_larger_than(5).build()
        assert passes(flt, "[6,10]")
        assert passes(flt, "(5,10]")
        assert error_of(flt, "[5,10]") == "InvalidParam:r:LeftTooSmall"
        assert error_of(flt, "(4,10]") == "InvalidParam:r:LeftTooSmall"

    def test_left_smaller_than(self):
        flt = int32_range().left_smaller_than(5).build()
        assert passes(flt, "[4,10]")
        assert passes(flt, "(3,10]")
        assert error_of(flt, "[5,10]") == "InvalidParam:r:LeftTooLarge"
        assert error_of(flt, "(4,10]") == "InvalidParam:r:LeftTooLarge"

    def test_left_equal(self):
        flt = int32_range().left_equal(5).build()
        assert passes(flt, "[5,9]")
        assert passes(flt, "(4,9]")
        assert error_of(flt, "[4,9]") == "InvalidParam:r:LeftTooSmall"
        assert error_of(flt, "[6,9]") == "InvalidParam:r:LeftTooLarge"

    def test_left_between(self):
        flt = int32_range().left_between(0, 10).build()
        assert passes(flt, "[0,20]")
        assert passes(flt, "(-1,20]")
        assert passes(flt, "(9,20]")
        assert error_of(flt, "(10,20]") == "InvalidParam:r:LeftTooLarge"
        assert error_of(flt, "[-1,20]") == "InvalidParam:r:LeftTooSmall"


class TestRightBounds:

    def test_right_max_open_steps_threshold_up(self):
        flt = int32_range().right_max(10).build()
        assert passes(flt, "[1,10]")
        assert passes(flt, "[1,11)")
        assert error_of(flt, "[1,11]") == "InvalidParam:r:RightTooLarge"
        assert error_of(flt, "[1,12)") == "InvalidParam:r:RightTooLarge"

    def test_right_min(self):
        flt = int32_range().right_min(10).build()
        assert passes(flt, "[1,10]")
        assert passes(flt, "[1,11)")
        assert error_of(flt, "[1,10)") == "InvalidParam:r:RightTooSmall"

    def test_right_larger_than(self):
        flt = int32_range().right_larger_than(10).build()
        assert passes(flt, "[1,11]")
        assert passes(flt, "[1,12)")
        assert error_of(flt, "[1,11)") == "InvalidParam:r:RightTooSmall"

    def test_right_smaller_than(self):
        flt = int32_range().right_smaller_than(10).build()
        assert passes(flt, "[1,9]")
        assert passes(flt, "[1,10)")
        assert error_of(flt, "[1,10]") == "InvalidParam:r:RightTooLarge"

    def test_right_equal(self):
        flt = int32_range().right_equal(10).build()
        assert passes(flt, "[1,10]")
        assert passes(flt, "[1,11)")
        assert error_of(flt, "[1,10)") == "InvalidParam:r:RightTooSmall"
        assert error_of(flt, "[1,12)") == "InvalidParam:r:RightTooLarge"

    def test_right_between(self):
        flt = int32_range().right_between(10, 20).build()
        assert passes(flt, "[0,21)")
        assert error_of(flt, "[0,22)") == "InvalidParam:r:RightTooLarge"
        assert error_of(flt, "[0,10)") == "InvalidParam:r:RightTooSmall"


class TestSaturation:
    """Open-side threshold steps clamp at the domain extrema"""

    def test_left_min_at_minimum(self):
        flt = int32_range().left_min(MIN_INT32).build()
        assert passes(flt, f"({MIN_INT32},0]")

    def test_left_larger_than_minimum_open(self):
        flt = int32_range().left_larger_than(MIN_INT32).build()
        assert error_of(flt, f"({MIN_INT32},0]") == "InvalidParam:r:LeftTooSmall"

    def test_right_max_at_int64_maximum(self):
        flt = int64_range().right_max(MAX_INT64).build()
        assert passes(flt, f"[0,{MAX_INT64})")
        assert passes(flt, f"[0,{MAX_INT64}]")

    def test_right_smaller_than_maximum_open(self):
        flt = int64_range().right_smaller_than(MAX_INT64).build()
        assert error_of(flt, f"[0,{MAX_INT64})") == "InvalidParam:r:RightTooLarge"


class TestDistance:

    def test_min_distance_zero_width_closed(self):
        assert passes(int32_range().min_distance(0).build(), "[5,5]")

    @pytest.mark.parametrize("text", ["(5,5]", "[5,5)", "(5,5)"])
    def test_open_side_on_zero_width_is_wrong_range(self, text):
        assert error_of(int32_range().min_distance(0).build(), text) == "InvalidParam:r:WrongRange"

    def test_both_open_on_unit_width_is_wrong_range(self):
        flt = int32_range().max_distance(10).build()
        assert error_of(flt, "(0,1)") == "InvalidParam:r:WrongRange"
        assert passes(flt, "(0,1]")

    def test_inverted_range_is_wrong_range(self):
        assert error_of(int32_range().max_distance(100).build(), "[10,1]") == "InvalidParam:r:WrongRange"

    def test_max_distance(self):
        flt = int32_range().max_distance(10).build()
        assert passes(flt, "[0,10]")
        assert passes(flt, "[0,11)")
        assert passes(flt, "(0,12)")
        assert error_of(flt, "[0,11]") == "InvalidParam:r:TooFar"

    def test_min_distance(self):
        flt = int32_range().min_distance(10).build()
        assert passes(flt, "[0,10]")
        assert error_of(flt, "[0,10)") == "InvalidParam:r:TooNear"
        assert error_of(flt, "(0,10]") == "InvalidParam:r:TooNear"

    def test_full_int64_span_does_not_overflow(self):
        full = f"[{MIN_INT64},{MAX_INT64}]"
        assert passes(int64_range().max_distance(MAX_UINT64).build(), full)
        assert error_of(int64_range().max_distance(MAX_UINT64 - 1).build(), full) == "InvalidParam:r:TooFar"
        assert passes(int64_range().min_distance(MAX_UINT64).build(), full)


class TestBuilder:

    def test_methods_return_same_builder(self):
        builder = int32_range()
        assert builder.left_min(1) is builder
        assert builder.allow("x").max_distance(3) is builder

    def test_built_filter_is_a_snapshot(self):
        builder = int32_range()
        loose = builder.build()
        builder.left_min(5)
        assert passes(loose, "[0,1]")
        assert error_of(builder.build(), "[0,1]") == "InvalidParam:r:LeftTooSmall"

    def test_builder_run_builds_on_the_fly(self):
        assert error_of(int32_range().left_min(5), "[0,1]") == "InvalidParam:r:LeftTooSmall"

    def test_checks_run_in_order_and_stop_at_first_failure(self):
        flt = int32_range().left_min(5).right_max(10).build()
        assert error_of(flt, "[0,20]") == "InvalidParam:r:LeftTooSmall"
        flt = int32_range().right_max(10).left_min(5).build()
        assert error_of(flt, "[0,20]") == "InvalidParam:r:RightTooLarge"

    def test_repeated_runs_do_not_drift(self):
        flt = int32_range().left_min(5).right_max(10).build()
        results = [flt.run("r", "(4,11)") for _ in range(5)]
        assert all(r.is_ok() for r in results)
        assert len({r.unwrap() for r in results}) == 1

    def test_defaults(self):
        flt = int32_range().left_default(0).right_default(100).build()
        assert flt.run("r", "[,]").unwrap() == Range(0, 100)
        assert flt.run("r", "").unwrap() == Range(0, 100)
        assert flt.run("r", "(,50)").unwrap() == Range(0, 50, False, False)

    def test_base(self):
        flt = int32_range().base(16).left_min(10).build()
        assert flt.run("r", "[a,ff]").unwrap() == Range(10, 255)
        assert error_of(flt, "[9,ff]") == "InvalidParam:r:LeftTooSmall"

    def test_custom_validator(self):
        def even_left(name, value):
            return invalid_param(name, "OddLeft") if value.left % 2 else None

        flt = int32_range().add_validator(even_left).build()
        assert passes(flt, "[2,3]")
        assert error_of(flt, "[1,3]") == "InvalidParam:r:OddLeft"


class TestMisconfiguration:
    """Bad thresholds surface as InternalError instead of raising"""

    @pytest.mark.parametrize("builder", [
        lambda: int32_range().left_min(MAX_INT32 + 1),
        lambda: int32_range().right_between(0, "ten"),
        lambda: int32_range().min_distance(-1),
        lambda: int32_range().max_distance(1.5),
        lambda: int32_range().base(1),
        lambda: uint32_range().left_default(-1),
    ])
    def test_invalid_validator(self, builder):
        result = builder().build().run("r", "[1,2]")
        error = result.unwrap_err()
        assert error.kind is ErrorKind.INTERNAL_ERROR
        assert str(error) == "InternalError:r:InvalidValidator"

    def test_warning_logged_at_build(self):
        builder = int32_range().left_min(MAX_INT32 + 1)
        with capture_logs() as logs:
            builder.build()
        assert any(
            entry["event"] == "invalid_validator" and entry["log_level"] == "warning"
            for entry in logs
        )

    def test_run_does_not_log(self):
        flt = int32_range().left_min(5).build()
        with capture_logs() as logs:
            flt.run("r", "[1,2]")
        assert logs == []


class TestProperties:

    @given(
        st.integers(MIN_INT32, MAX_INT32),
        st.integers(MIN_INT32, MAX_INT32),
        st.booleans(),
    )
    def test_property_left_min(self, left, threshold, left_closed):
        flt = int32_range().left_min(threshold).build()
        value = Range(left, MAX_INT32, left_closed, True)
        effective = left if left_closed else left + 1
        assert flt.run("r", value).is_ok() == (effective >= threshold)

    @given(
        st.integers(MIN_INT64, MAX_INT64),
        st.integers(MIN_INT64, MAX_INT64),
        st.booleans(),
    )
    def test_property_right_max(self, right, threshold, right_closed):
        flt = int64_range().right_max(threshold).build()
        value = Range(MIN_INT64, right, True, right_closed)
        effective = right if right_closed else right - 1
        assert flt.run("r", value).is_ok() == (effective <= threshold)

    @given(
        st.integers(MIN_INT64, MAX_INT64),
        st.integers(MIN_INT64, MAX_INT64),
        st.booleans(),
        st.booleans(),
        st.integers(0, MAX_UINT64),
    )
    def test_property_max_distance(self, left, right, left_closed, right_closed, limit):
        flt = int64_range().max_distance(limit).build()
        result = flt.run("r", Range(left, right, left_closed, right_closed))

        width = right - left
        opened = (not left_closed) + (not right_closed)
        if width < 0 or (opened and width < opened):
            assert str(result.unwrap_err()) == "InvalidParam:r:WrongRange"
        elif width - opened > limit:
            assert str(result.unwrap_err()) == "InvalidParam:r:TooFar"
        else:
            assert result.is_ok()
