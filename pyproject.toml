[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motorcarrier"
version = "0.1.0"
description = "Motor carrier control primitives: fixed-point arithmetic, PID controllers, quadrature decoding and servo commands"
requires-python = ">=3.10"
dependencies = []
keywords = ["pid", "motor", "encoder", "quadrature", "servo", "fixed-point", "control"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["motorcarrier"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
