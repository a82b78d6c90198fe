"""Fixed-point maths, PID control, quadrature decoding and servo commands for motor carriers."""

__version__ = "0.1.0"
__all__ = ["fixedpoint", "pid", "motor_pid", "quadrature", "encoder_wrapper", "servo"]