"""
Error taxonomy shared by the engine, ingestion and the server.
"""

from typing import Optional


class NotFoundError(KeyError):
    """A query referenced a node (typically a user) that is not in the graph."""

    def __init__(self, node_id: str):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node not found in graph: {self.node_id}"


class IngestionError(ValueError):
    """A malformed input record. Fatal to the ingestion pass."""

    def __init__(self, source: str, row: Optional[int], reason: str):
        self.source = source
        self.row = row
        self.reason = reason
        location = f"{source}, row {row}" if row is not None else source
        super().__init__(f"Malformed record in {location}: {reason}")


class EngineStateError(RuntimeError):
    """Mutation after the engine was frozen, or a query before it was."""
