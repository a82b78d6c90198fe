import pytest

from motorcarrier.motor_pid import CascadePID, ControlMode, Target
from motorcarrier.pid import Mode


class FakeClock:
    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now


class FakeEncoder:
    def __init__(self):
        self.raw_count = 0
        self.cps = 0.0

    def get_raw_count(self):
        return self.raw_count

    def get_count_per_second(self):
        return self.cps


class FakeMotor:
    def __init__(self):
        self.duties = []

    def set_duty(self, duty):
        self.duties.append(duty)


def make(periodms_velo=10, periodms_pos=20):
    clock = FakeClock()
    encoder = FakeEncoder()
    motor = FakeMotor()
    pid = CascadePID(encoder, motor, 0, periodms_velo, periodms_pos, clock=clock)
    return pid, encoder, motor, clock


def test_defaults():
    pid, *_ = make()
    assert pid.mode is ControlMode.VELOCITY
    assert pid.position_controller.kp == 5000.0
    assert pid.velocity_controller.ki == 100.0
    assert pid.velocity_controller.kd == 0.0


def test_sample_times_applied():
    pid, *_ = make(periodms_velo=15, periodms_pos=40)
    assert pid.velocity_controller.sample_time == 15
    assert pid.position_controller.sample_time == 40


def test_set_and_reset_gains():
    pid, *_ = make()
    pid.set_gains(1, 2, 3)
    for controller in (pid.position_controller, pid.velocity_controller):
        assert (controller.kp, controller.ki, controller.kd) == (1.0, 2.0, 3.0)
    pid.reset_gains()
    for controller in (pid.position_controller, pid.velocity_controller):
        assert (controller.kp, controller.ki, controller.kd) == (5000.0, 100.0, 0.0)


def test_update_before_run_does_nothing():
    pid, encoder, motor, _ = make()
    pid.set_setpoint(Target.VELOCITY, 10)
    pid.update()
    assert motor.duties == []


def test_velocity_forward_saturates_with_deadzone():
    pid, encoder, motor, _ = make()
    pid.run()
    pid.set_setpoint(Target.VELOCITY, 10)
    pid.update()
    assert motor.duties == [100 + 13]


def test_velocity_reverse_saturates_with_deadzone():
    pid, encoder, motor, _ = make()
    pid.run()
    pid.set_setpoint(Target.VELOCITY, -10)
    pid.update()
    assert motor.duties == [-100 - 13]


def test_zero_output_gets_negative_deadzone():
    pid, encoder, motor, _ = make()
    pid.run()
    pid.update()
    assert motor.duties == [-13]


def test_update_waits_for_sample_period():
    pid, encoder, motor, clock = make(periodms_velo=10)
    pid.run()
    pid.set_setpoint(Target.VELOCITY, 10)
    pid.update()
    pid.update()
    assert len(motor.duties) == 1
    clock.now += 10
    pid.update()
    assert len(motor.duties) == 2


def test_stop_halts_updates():
    pid, encoder, motor, clock = make()
    pid.run()
    pid.update()
    pid.stop()
    clock.now += 100
    pid.update()
    assert len(motor.duties) == 1
    assert pid.velocity_controller.mode is Mode.MANUAL
    assert pid.position_controller.mode is Mode.MANUAL


def test_velocity_mode_ignores_position_loop():
    pid, encoder, motor, _ = make()
    pid.run()
    pid.set_setpoint(Target.POSITION, 1000)
    pid.update()
    assert pid.target_velocity == 0.0
    assert pid.target_position == 1000.0


def test_setters_store_values():
    pid, *_ = make()
    pid.set_limits(-50, 80)
    pid.set_max_velocity(200)
    pid.set_max_acceleration(7)
    assert (pid.min_duty, pid.max_duty) == (-50, 80)
    assert pid.max_velocity == 200.0
    assert pid.max_acceleration == 7.0


def test_setpoint_wraps_to_int16():
    pid, *_ = make()
    pid.set_setpoint(Target.VELOCITY, 32768)
    assert pid.target_velocity == -32768.0


def test_invalid_control_mode_rejected():
    pid, *_ = make()
    with pytest.raises(ValueError):
        pid.set_control_mode(7)


def test_instances_are_numbered_in_order():
    first, *_ = make()
    second, *_ = make()
    assert second.instance == first.instance + 1