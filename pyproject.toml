[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brauser"
version = "0.1.0"
description = "A minimalistic terminal web browser with numbered links, history and content detection"
requires-python = ">=3.10"
keywords = ["browser", "terminal", "html", "text-mode", "web", "ascii-art"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
]
dependencies = [
    "requests",
    "beautifulsoup4",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
brauser = "brauser.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["brauser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
