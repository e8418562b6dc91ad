__title__ = 'canopy'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

import logging

from .console import *
from .faults import *
from .formatter import *
from .labels import *
from .nodes import *
from .tree import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

# Library logging: silent unless the host configures a handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the model
__all__ += nodes.__all__  # type: ignore[attr-defined]
# Load the exposed API of the formatters
__all__ += formatter.__all__  # type: ignore[attr-defined]
# Load the exposed API of the labels
__all__ += labels.__all__  # type: ignore[attr-defined]
# Load the exposed API of the tree rules
__all__ += tree.__all__  # type: ignore[attr-defined]
# Load the exposed API of the console output
__all__ += console.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
