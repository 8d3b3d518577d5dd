"""Small tools and building blocks: HTML, expressions, sets, memoization and concurrency."""

__version__ = "0.1.0"

__all__ = [
    "bank",
    "bytecounter",
    "cake",
    "chat",
    "crawler",
    "du",
    "expr",
    "geometry",
    "htmltree",
    "intset",
    "links",
    "memo",
    "pipeline",
    "shop",
    "sorting",
    "surface",
    "tempconv",
    "thumbnail",
    "urlvalues",
    "xmlselect",
]