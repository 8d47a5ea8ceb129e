# tests/test_power.py
import math

import pytest

from builders import make_build, make_psu
from models import Build
from power import (
    calculate_energy_cost, calculate_tco, clamp_score, estimate_load, get_headroom, psu_length_mm,
    recommended_psu_wattage, round_half_up,
)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_clamp_score_bounds():
    assert clamp_score(-12) == 0
    assert clamp_score(140) == 100
    assert clamp_score(69.5) == 70


def test_estimate_load_full_build():
    # 60 + 105*1.2 + 250*1.3 + 4*5 (32GB) + 10 (one drive)
    assert estimate_load(make_build()) == 541


def test_estimate_load_empty_build_is_base():
    assert estimate_load(Build()) == 60


def test_get_headroom():
    assert get_headroom(850, 500) == 1.7
    assert get_headroom(850, 0) == math.inf


def test_recommended_psu_wattage_rounds_to_50():
    # 541 * 1.3 = 703.3 -> 750
    assert recommended_psu_wattage(541) == 750
    assert recommended_psu_wattage(500) == 650


def test_psu_length_defaults_by_form_factor():
    assert psu_length_mm(make_psu(length_mm=None, form_factor="SFX")) == 130
    assert psu_length_mm(make_psu(length_mm=None, form_factor="ATX")) == 160
    assert psu_length_mm(make_psu(length_mm=140)) == 140
    assert psu_length_mm(make_psu(length_mm=140), override=180) == 180


def test_energy_cost():
    # 0.5kW * 4h * 365 days * $0.15
    assert calculate_energy_cost(500, 4, 0.15) == pytest.approx(109.5)


def test_calculate_tco():
    tco = calculate_tco(500, 1.1, 0.15, hours_per_day=4)
    assert tco["wall_draw_w"] == 550
    assert tco["yearly_cost"] == pytest.approx(120.45, abs=0.01)
