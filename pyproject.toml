[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chanworks"
version = "0.1.0"
description = "Small concurrent tools: a memoizing cache, a bank account, pipelines, crawlers, a site mirror, disk usage, thumbnails, a fractal renderer and TCP clients and servers"
requires-python = ">=3.10"
keywords = [
    "concurrency",
    "threads",
    "memoization",
    "crawler",
    "mirror",
    "disk-usage",
    "thumbnail",
    "fractal",
    "tcp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: System :: Networking",
]
dependencies = [
    "requests",
    "beautifulsoup4",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chanworks-bank = "chanworks.bank:main"
chanworks-pipeline = "chanworks.pipeline:main"
chanworks-spinner = "chanworks.spinner:main"
chanworks-countdown = "chanworks.countdown:main"
chanworks-crawl = "chanworks.crawl:main"
chanworks-mirror = "chanworks.mirror:main"
chanworks-first = "chanworks.first:main"
chanworks-du = "chanworks.du:main"
chanworks-thumbnail = "chanworks.thumbnail:main"
chanworks-newton = "chanworks.newton:main"
chanworks-clockall = "chanworks.clockall:main"
chanworks-reverb = "chanworks.reverb:main"
chanworks-netcat = "chanworks.netcat:main"

[tool.hatch.build.targets.wheel]
packages = ["chanworks"]

[tool.hatch.build.targets.sdist]
include = ["chanworks", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
