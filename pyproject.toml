[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "applinkverify"
version = "0.1.0"
description = "App linking domain verification: parse applinking asset files and decide whether a host vouches for an app."
requires-python = ">=3.10"
dependencies = []
keywords = ["applinking", "domain verification", "app links", "well-known", "deep links"]
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
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["applinkverify"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
