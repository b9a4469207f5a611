[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vrshelf"
version = "0.1.0"
description = "Building blocks for a VR video library: file hashing, funscript heatmaps, ffmpeg previews, scene metadata scraping and player packet handling."
requires-python = ">=3.10"
keywords = [
    "vr",
    "video",
    "funscript",
    "heatmap",
    "ffmpeg",
    "oshash",
    "scraper",
    "media-library",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Typing :: Typed",
]
dependencies = [
    "pillow",
    "beautifulsoup4",
    "requests",
    "python-slugify",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vrshelf"]

[tool.hatch.build.targets.sdist]
include = ["vrshelf", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
