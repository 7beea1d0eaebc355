[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dapwire"
version = "1.65.0"
description = "Debug Adapter Protocol building blocks: byte streams, Content-Length framing, TCP transport and typed protocol messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["dap", "debug adapter protocol", "debugger", "json", "framing"]
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
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dapwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
