from enum import Enum


class EdgeType(str, Enum):
    """Edge direction (DIRECTED, UNDIRECTED).

    Attributes:
        DIRECTED: Counted only in the source's out-set and the target's in-set
        UNDIRECTED: Counted in both endpoints' in- and out-sets
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"
