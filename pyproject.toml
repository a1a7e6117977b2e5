[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitchat"
version = "0.0.1"
description = "Config files, commit parsing and message formatting for a Git-based chat tool"
requires-python = ">=3.10"
keywords = ["git", "chat", "messaging", "config", "commit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gitchat"]

[tool.pytest.ini_options]
addopts = "-ra"
