[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commonapi"
version = "0.1.0"
description = "Core runtime pieces for service-oriented middleware: addresses, events, proxy and stub bases, main-loop hooks, logging and INI configuration."
requires-python = ">=3.10"
dependencies = []
keywords = ["middleware", "ipc", "proxy", "stub", "events", "mainloop", "ini"]
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
    "Topic :: Software Development :: Object Brokering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["commonapi"]

[tool.pytest.ini_options]
addopts = "-ra"
