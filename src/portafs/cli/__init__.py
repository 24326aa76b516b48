"""portafs CLI: walk, copy, and empty directory trees."""

from ._helpers import main  # noqa: F401  entry point

# Import command modules to register Click commands with the main group.
from . import _basic, _cp, _walk  # noqa: F401
