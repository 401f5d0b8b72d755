"""Input front ends: line-oriented keyword input and tag tree input.

Both parsers populate the same driver state through the driver's binding
commands.
"""

from simelastic.parsers.legacy import LegacyTextParser
from simelastic.parsers.reader import LineReader
from simelastic.parsers.tag_tree import TagTreeParser

__all__ = [
    "LegacyTextParser",
    "TagTreeParser",
    "LineReader",
]
