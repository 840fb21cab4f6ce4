"""Routing primitives: tag escaping and the writer cache."""

from dynsink.core.escaping import PathResolver, contains_tag, escape_string
from dynsink.core.writer_cache import WriterCache

__all__ = ["PathResolver", "WriterCache", "contains_tag", "escape_string"]
