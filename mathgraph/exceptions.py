"""Exceptions raised by mathgraph.

Everything that is not listed here is a plain built-in: ``TypeError`` for wrong
member types, ``ValueError`` for violated preconditions and ``LookupError`` for
"nothing there" conditions such as an empty graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.walk import Walk


class MathGraphError(Exception):
    """Base class for mathgraph-specific errors."""


class CrossGraphError(MathGraphError, ValueError):
    """An edge was requested between vertices of two different graphs."""


class DisconnectedGraphError(MathGraphError, ValueError):
    """A spanning result (tree, tour) was requested on a graph with several components."""


class UnreachableVertexError(MathGraphError, KeyError):
    """No path exists from the source vertex to the requested vertex."""

    def __str__(self):
        return self.args[0] if self.args else "vertex is not reachable"


class NegativeCycleError(MathGraphError):
    """A cycle with negative total weight is reachable from the source.

    There is no cheapest path in that case: any path touching the cycle gets
    cheaper with every extra lap.

    Parameters
    ----------
    message : str
        Error message.
    cycle : Walk
        The offending cycle.

    """

    def __init__(self, message: str, cycle: Walk):
        super().__init__(message)
        self.cycle = cycle

    def get_cycle(self) -> Walk:
        return self.cycle


class NoNegativeCycleError(MathGraphError, LookupError):
    """Raised by ``get_cycle_negative`` when the graph has no negative cycle."""


class EmptyGraphError(MathGraphError, ValueError, LookupError):
    """An operation needs at least one vertex but the graph has none."""
