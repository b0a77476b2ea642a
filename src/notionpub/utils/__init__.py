from .chunk import chunk_children
from .redact import redact

__all__ = [
    "chunk_children",
    "redact",
]
