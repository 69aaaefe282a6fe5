import pytest

from domain.layout.scales import js_round, linear_scale, sqrt_scale


def test_linear_scale():
    scale = linear_scale((0, 10), (0, 100))

    assert scale(5) == pytest.approx(50)
    assert scale(20) == pytest.approx(100)
    assert scale(-5) == pytest.approx(0)


def test_linear_scale_without_clamp_and_reversed():
    assert linear_scale((0, 10), (0, 100), clamp=False)(20) == pytest.approx(200)
    # reversed domain: high input, low output
    assert linear_scale((10, 0), (140, 370))(10) == pytest.approx(140)


def test_degenerate_domain_maps_to_midpoint():
    assert linear_scale((3, 3), (0, 10))(3) == pytest.approx(5)
    assert sqrt_scale((0, 0), (6, 16))(0) == pytest.approx(11)


def test_sqrt_scale():
    scale = sqrt_scale((0, 4), (0, 10))

    assert scale(1) == pytest.approx(5)
    assert scale(4) == pytest.approx(10)
    assert scale(0) == pytest.approx(0)


def test_js_round_rounds_half_up():
    assert js_round(2.5) == 3
    assert js_round(3.5) == 4
    assert js_round(-0.5) == 0
    assert js_round(-1.5) == -1
    assert js_round(2.4) == 2
