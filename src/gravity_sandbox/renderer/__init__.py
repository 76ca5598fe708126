# MIT License (see LICENSE)
"""
Rendering adapters.

    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op renderer for performance testing.
    - BufferedRenderer: Records frames in screen coordinates.

The engine has no drawing dependency; these adapters are optional.
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
