[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inboxd"
version = "0.1.0"
description = "Building blocks for a universal inbox: hashtag and URL extraction, page fetching, pre-processing rules, progress tracking and org-mode UI parsing."
requires-python = ">=3.10"
keywords = ["inbox", "org-mode", "capture", "url-fetching", "hashtags"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Text Processing :: Markup :: HTML",
    "Typing :: Typed",
]
dependencies = [
    "beautifulsoup4>=4.12",
    "httpx>=0.27",
    "cryptography>=42",
]

[project.optional-dependencies]
test = [
    "pytest>=8",
    "pytest-asyncio>=0.23",
    "respx>=0.21",
]

[tool.hatch.build.targets.wheel]
packages = ["inboxd"]

[tool.hatch.build.targets.sdist]
include = ["inboxd", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
