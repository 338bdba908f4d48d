[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "healthboard"
version = "0.1.0"
description = "Web front end for an endpoint health dashboard: status badges, paging, maintenance windows and a WSGI application."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "monitoring",
    "health",
    "status-page",
    "uptime",
    "badge",
    "wsgi",
    "maintenance-window",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["healthboard"]

[tool.hatch.build.targets.sdist]
include = ["healthboard", "tests", "README.md", "pyproject.toml"]

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
