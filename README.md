# motorcarrier

Building blocks for driving DC motors and servos on a motor carrier board,
written in plain Python with no third-party dependencies.

## What is inside

- `motorcarrier.fixedpoint` provides `FpS`, a fixed-point number that stores
  its own count of fractional bits. It emulates signed 8/16/32/64-bit storage
  (`base_bits`), can be built from a raw integer with `FpS.from_raw`, and has
  the factories `fps8`, `fps16`, `fps32` and `fps64`. Values of different
  precision are combined at the lower of the two precisions.
- `motorcarrier.pid` provides `PIDController`, a sample-time based PID with
  output clamping, anti-windup, proportional-on-error or
  proportional-on-measurement, and bumpless manual-to-automatic transfer. The
  process value, target and result live in its `input`, `setpoint` and
  `output` attributes. The enums `Mode`, `Direction` and `ProportionalOn` go
  with it.
- `motorcarrier.motor_pid` provides `CascadePID`, a position loop feeding a
  velocity loop. It limits the slew of the velocity command by the maximum
  acceleration and adds a fixed deadzone offset to the duty cycle sent to the
  motor. The enums `ControlMode` and `Target` go with it. The encoder object
  you pass must have `get_raw_count()` and `get_count_per_second()`; the motor
  object must have `set_duty(duty)`.
- `motorcarrier.quadrature` provides `QuadratureDecoder` and the pure `step`
  state transition for two-channel incremental encoders. The count is a signed
  32-bit value that wraps.
- `motorcarrier.encoder_wrapper` provides `EncoderWrapper`, a quadrature
  decoder together with count and velocity interrupt thresholds
  (`set_irq_on_count`, `set_irq_on_velocity`).
- `motorcarrier.servo` provides `ServoMotor`, which turns angles (0 to 180
  degrees, mapped to duty 7 to 28) and frequencies into `ServoCommand`
  messages for a transport, and `map_range`, an integer range mapping.

## What it does not do

The package does not talk to hardware. It reads no pins, drives no PWM and
opens no bus: you feed pin levels to the decoder yourself, supply the encoder
and motor objects used by `CascadePID`, and supply the transport that
`ServoMotor` hands its commands to. There is no command-line program.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Fixed-point arithmetic:

```python
from motorcarrier.fixedpoint import fps32

a = fps32(3.5, 8)
b = fps32(1.25, 8)
print(float(a * b))          # 4.375
print(int(fps32(-66.3, 8)))  # -67, rounds toward negative infinity
```

Decoding a quadrature signal:

```python
from motorcarrier.quadrature import QuadratureDecoder

decoder = QuadratureDecoder(False, False)
for pin1, pin2 in [(False, True), (True, True), (True, False), (False, False)]:
    decoder.update(pin1, pin2)
print(decoder.read())  # 4
```

A PID controller runs on a clock you provide, which returns milliseconds:

```python
from motorcarrier.pid import Mode, PIDController

now = [0]
pid = PIDController(2.0, 0.5, 0.0, clock=lambda: now[0])
pid.set_output_limits(-100.0, 100.0)
pid.setpoint = 10.0
pid.input = 0.0
pid.set_mode(Mode.AUTOMATIC)
now[0] += 100
if pid.compute():
    print(pid.output)
```

Servo commands go to any object with a `set_data(command, instance, value)`
method:

```python
from motorcarrier.servo import ServoMotor


class Recorder:
    def __init__(self):
        self.sent = []

    def set_data(self, command, instance, value):
        self.sent.append((command, instance, value))


transport = Recorder()
servo = ServoMotor(transport, 0)
servo.set_angle(90)
servo.detach()
print(transport.sent)
# [(<ServoCommand.SET_PWM_DUTY_CYCLE: ...>, 0, 17),
#  (<ServoCommand.SET_PWM_DUTY_CYCLE: ...>, 0, -1)]
```