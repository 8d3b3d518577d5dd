[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "progkit"
version = "0.1.0"
description = "Small, self-contained tools and building blocks: HTML link extraction, an expression evaluator, bit-vector sets, memoization, concurrent pipelines and more."
requires-python = ">=3.10"
keywords = [
    "html",
    "crawler",
    "expression-evaluator",
    "intset",
    "memoization",
    "concurrency",
    "wsgi",
    "thumbnail",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "requests",
    "html5lib",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
    "pytest-asyncio",
]

[project.scripts]
progkit-htmltree = "progkit.htmltree:main"
progkit-links = "progkit.links:main"
progkit-tempflag = "progkit.tempconv:main"
progkit-surface = "progkit.surface:main"
progkit-shop = "progkit.shop:main"
progkit-sorting = "progkit.sorting:main"
progkit-xmlselect = "progkit.xmlselect:main"
progkit-du = "progkit.du:main"
progkit-chat = "progkit.chat:main"
progkit-pipeline = "progkit.pipeline:main"
progkit-thumbnail = "progkit.thumbnail:main"
progkit-crawl = "progkit.crawler:main"

[tool.hatch.build.targets.wheel]
packages = ["progkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
