"""Reference in-memory host for documents held as Python strings."""

from sql_upcase.infrastructure.host.text_document import InMemoryHost, TextDocument

__all__ = ["InMemoryHost", "TextDocument"]
