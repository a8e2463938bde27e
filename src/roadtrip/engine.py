"""Distance queries and shortest-route search over the fused country tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import networkx as nx

from .borders import BorderTable, load_borders
from .capdist import CapitalDistanceTable, load_capital_distances
from .config import AppConfig
from .models import DistanceFailure, DistanceResult, Hop
from .state_names import NameAliasTable, load_state_names

LOGGER = logging.getLogger("roadtrip.engine")


class RouteEngine:
    """Owns the three loaded tables and answers queries against them.

    A border crossing u -> v is traversable only when v is listed on u's
    border record, both names resolve to codes, and the capital distance
    for that code pair is known. Searches minimize the sum of capital
    distances; reported hops carry the border length for display.
    """

    def __init__(
        self,
        borders: BorderTable,
        capitals: CapitalDistanceTable,
        aliases: NameAliasTable,
    ) -> None:
        self.borders = borders
        self.capitals = capitals
        self.aliases = aliases
        self.graph = self._build_graph()

    @classmethod
    def from_paths(cls, borders: Path, capdist: Path, state_names: Path) -> RouteEngine:
        # All three tables are loaded before the engine accepts queries.
        border_table = load_borders(borders)
        capital_table = load_capital_distances(capdist)
        alias_table = load_state_names(state_names)
        return cls(border_table, capital_table, alias_table)

    @classmethod
    def from_config(cls, cfg: AppConfig) -> RouteEngine:
        return cls.from_paths(cfg.paths.borders, cfg.paths.capdist, cfg.paths.state_names)

    def get_distance(self, country_a: str, country_b: str) -> DistanceResult:
        """Capital distance between two countries that share a border."""
        if not self.borders.has_country(country_a) or not self.borders.has_country(country_b):
            return self._not_found(country_a, country_b, DistanceFailure.UNKNOWN_COUNTRY)
        if self.borders.border_distance(country_a, country_b) is None:
            return self._not_found(country_a, country_b, DistanceFailure.NO_SHARED_BORDER)

        code_a = self.aliases.code_of(country_a)
        code_b = self.aliases.code_of(country_b)
        if code_a is None or code_b is None:
            return self._not_found(country_a, country_b, DistanceFailure.NO_COUNTRY_CODE)

        distance_km = self.capitals.distance(code_a, code_b)
        if distance_km is None:
            return self._not_found(country_a, country_b, DistanceFailure.NO_CAPITAL_DISTANCE)
        return DistanceResult.found(country_a, country_b, distance_km)

    def traversable_neighbors(self, country: str) -> Iterator[tuple[str, int]]:
        """Yield `(neighbor, capital_km)` for every traversable crossing out of `country`."""
        code = self.aliases.code_of(country)
        if code is None:
            return
        for neighbor in self.borders.neighbors(country):
            neighbor_code = self.aliases.code_of(neighbor)
            if neighbor_code is None:
                continue
            capital_km = self.capitals.distance(code, neighbor_code)
            if capital_km is not None:
                yield neighbor, capital_km

    def _build_graph(self) -> nx.DiGraph:
        """Directed graph of traversable crossings, one node per border record."""
        graph = nx.DiGraph()
        graph.add_nodes_from(self.borders.countries)
        for country in self.borders.countries:
            for neighbor, capital_km in self.traversable_neighbors(country):
                graph.add_edge(
                    country,
                    neighbor,
                    capital_km=capital_km,
                    border_km=self.borders.neighbors(country)[neighbor],
                )
        LOGGER.debug(
            "Route graph has %d countries and %d traversable crossings",
            graph.number_of_nodes(),
            graph.number_of_edges(),
        )
        return graph

    def find_route(self, country_a: str, country_b: str) -> tuple[Hop, ...]:
        """Shortest route by total capital distance; empty when there is none."""
        if not self.borders.has_country(country_a) or not self.borders.has_country(country_b):
            return ()
        try:
            path = nx.dijkstra_path(self.graph, country_a, country_b, weight="capital_km")
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return ()
        if not path or path[0] != country_a:
            return ()

        hops: list[Hop] = []
        for origin, destination in zip(path, path[1:]):
            crossing = self.graph.edges[origin, destination]
            hops.append(
                Hop(
                    origin=origin,
                    destination=destination,
                    border_km=crossing["border_km"],
                    capital_km=crossing["capital_km"],
                )
            )
        return tuple(hops)

    def find_path(self, country_a: str, country_b: str) -> list[str]:
        """Route as `"A --> B (N km)"` lines; an empty list means no route."""
        return [hop.describe() for hop in self.find_route(country_a, country_b)]

    @staticmethod
    def _not_found(country_a: str, country_b: str, failure: DistanceFailure) -> DistanceResult:
        if failure in (DistanceFailure.UNKNOWN_COUNTRY, DistanceFailure.NO_SHARED_BORDER):
            LOGGER.info("No shared border or country not found for: %s and %s", country_a, country_b)
        elif failure is DistanceFailure.NO_COUNTRY_CODE:
            LOGGER.info("No country code for: %s and %s", country_a, country_b)
        else:
            LOGGER.info("No capital distance data for: %s and %s", country_a, country_b)
        return DistanceResult.not_found(country_a, country_b, failure)


def total_capital_km(route: tuple[Hop, ...]) -> int:
    return sum(hop.capital_km for hop in route)
