[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zulucontrol"
version = "0.1.0"
description = "User-interface state machine, device status model and I2C control protocol for an IDE drive emulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["ide", "emulator", "drive", "i2c", "disk-image", "cdrom", "zip"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zulucontrol"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
