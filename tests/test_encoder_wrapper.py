import pytest
from hypothesis import given
from hypothesis import strategies as st

from motorcarrier.encoder_wrapper import EncoderWrapper
from motorcarrier.fixedpoint import FpS

FORWARD = [(0, 1), (1, 1), (1, 0), (0, 0)]


@pytest.fixture
def wrapper():
    return EncoderWrapper(0, 0, 0)


def test_defaults(wrapper):
    assert wrapper.target_count == -1
    assert wrapper.target_velocity.to_float() == -1.0
    assert wrapper.irq_ratio.to_float() == 2.0
    assert wrapper.irq_count_enabled is False
    assert wrapper.irq_velocity_enabled is False
    assert wrapper.read() == 0


def test_index_kept():
    assert EncoderWrapper(1, 0, 3).index == 3


def test_forward_cycle_counts_four(wrapper):
    deltas = [wrapper.update(a, b) for a, b in FORWARD]
    assert wrapper.read() == sum(deltas)
    assert wrapper.read() == 4


def test_reverse_returns_to_zero(wrapper):
    for a, b in FORWARD:
        wrapper.update(a, b)
    for a, b in reversed([(0, 0)] + FORWARD[:-1]):
        wrapper.update(a, b)
    assert wrapper.read() == 0


def test_no_change_no_movement(wrapper):
    assert wrapper.update(0, 0) == 0
    assert wrapper.read() == 0


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_reset_counter_round_trip(value):
    w = EncoderWrapper(0, 0, 0)
    w.reset_counter(value)
    assert w.read() == value


def test_set_irq_on_count(wrapper):
    wrapper.set_irq_on_count(500)
    assert wrapper.target_count == 500
    assert wrapper.irq_count_enabled is True


def test_set_irq_on_velocity_enables(wrapper):
    wrapper.set_irq_on_velocity(250)
    assert wrapper.irq_velocity_enabled is True
    assert wrapper.target_velocity == FpS(250, 8, 32)
    assert wrapper.target_velocity.to_int() == 250


def test_set_irq_on_velocity_masks_high_byte(wrapper):
    wrapper.set_irq_on_velocity((7 << 24) | 100)
    assert wrapper.target_velocity.to_int() == 100


def test_set_irq_on_velocity_zero_disables(wrapper):
    wrapper.set_irq_on_velocity(40)
    wrapper.set_irq_on_velocity(0)
    assert wrapper.irq_velocity_enabled is False
    assert wrapper.target_velocity.to_int() == 40