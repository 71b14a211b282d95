import pytest

from roda.animation.easing import Easing, ease_out_cubic, get_easing


@pytest.mark.parametrize("easing", list(Easing))
def test_easing_endpoints(easing):
    func = get_easing(easing)
    assert func(0.0) == pytest.approx(0.0)
    assert func(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("easing", list(Easing))
def test_easing_is_monotonic(easing):
    func = get_easing(easing)
    values = [func(i / 100) for i in range(101)]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_lookup_by_name_is_case_insensitive():
    assert get_easing("ease_out_cubic") is ease_out_cubic
    assert get_easing("EASE_OUT_CUBIC") is ease_out_cubic


def test_unknown_easing_raises():
    with pytest.raises(ValueError):
        get_easing("bounce_forever")


def test_cubic_decelerates():
    assert ease_out_cubic(0.5) == 0.875
