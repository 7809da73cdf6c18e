"""
Bipartite user/product interaction graph on top of NetworkX.
"""

from typing import Iterator, Set

import networkx as nx

from common.constants import PRODUCT_ROLE, USER_ROLE
from common.errors import NotFoundError


class InteractionGraph:
    """Undirected simple graph; every node carries a `role` of user or product."""

    def __init__(self):
        self.G = nx.Graph()

    def add_user(self, user_id: str) -> None:
        self._add_node(user_id, USER_ROLE)

    def add_product(self, product_id: str) -> None:
        self._add_node(product_id, PRODUCT_ROLE)

    def _add_node(self, node_id: str, role: str) -> None:
        if node_id in self.G:
            existing = self.G.nodes[node_id]["role"]
            if existing != role:
                raise ValueError(f"Node {node_id!r} already exists with role {existing!r}, cannot add as {role!r}")
            return
        self.G.add_node(node_id, role=role)

    def add_interaction(self, user_id: str, product_id: str) -> None:
        """Ensure both nodes and the edge between them exist. Repeats are no-ops."""
        self.add_user(user_id)
        self.add_product(product_id)
        # nx.Graph is simple, re-adding an edge only refreshes its attributes
        self.G.add_edge(user_id, product_id)

    def neighbors(self, node_id: str) -> Set[str]:
        if node_id not in self.G:
            raise NotFoundError(node_id)
        return set(self.G.neighbors(node_id))

    def contains(self, node_id: str) -> bool:
        return node_id in self.G

    __contains__ = contains

    def role(self, node_id: str) -> str:
        if node_id not in self.G:
            raise NotFoundError(node_id)
        return self.G.nodes[node_id]["role"]

    def products_of(self, user_id: str) -> Set[str]:
        """1-hop product neighbors of a user."""
        return {n for n in self.neighbors(user_id) if self.G.nodes[n]["role"] == PRODUCT_ROLE}

    def users_of(self, product_id: str) -> Set[str]:
        return {n for n in self.neighbors(product_id) if self.G.nodes[n]["role"] == USER_ROLE}

    def users(self) -> Iterator[str]:
        return (n for n, role in self.G.nodes(data="role") if role == USER_ROLE)

    def products(self) -> Iterator[str]:
        return (n for n, role in self.G.nodes(data="role") if role == PRODUCT_ROLE)

    @property
    def number_of_users(self) -> int:
        return sum(1 for _ in self.users())

    @property
    def number_of_products(self) -> int:
        return sum(1 for _ in self.products())

    @property
    def number_of_interactions(self) -> int:
        return self.G.number_of_edges()

    def is_bipartite(self) -> bool:
        """True when no edge joins two nodes of the same role."""
        return all(self.G.nodes[u]["role"] != self.G.nodes[v]["role"] for u, v in self.G.edges())
