"""Type aliases used throughout docsify_helper."""

from __future__ import annotations

import os  # noqa: TC003
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]  # noqa: UP007
