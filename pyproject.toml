[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zeroplugins"
version = "0.1.0"
description = "Chat-bot plugin logic: emoji mixing, epidemic lookup, request handling, repository search, fortune and gacha images, and avatar meme GIFs"
requires-python = ">=3.10"
keywords = ["chat", "bot", "plugins", "emoji", "gif", "image", "gacha", "fortune"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zeroplugins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
