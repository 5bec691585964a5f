"""PageRank over the link graph discovered during a crawl.

Links are accumulated into a networkx directed graph while pages are crawled.
Once the crawl is over, ranks are computed with a damped, synchronous
(Jacobi) power iteration: every page's next rank is computed from the current
ranks of its inbound neighbours before any page's rank is replaced.

Pages without outbound links keep their rank mass; it is not redistributed
to the other pages. On graphs with such dangling pages the ranks therefore sum
to less than one.
"""

import logging
from typing import Iterable

import networkx as nx
import numpy as np

from crawlrank.config import Config

logger = logging.getLogger(__name__)


class LinkGraphRanker:
    """Accumulates a directed link graph and computes PageRank over it."""

    def __init__(self) -> None:
        self.graph = nx.DiGraph()
        self._ranks: dict[str, float] = {}
        self.iterations: int = 0
        self.converged: bool = False

    def add_links(self, source: str, targets: Iterable[str]) -> None:
        """Record the outbound links of a page.

        Source and targets become known pages if they are new. Links from a
        page to itself are ignored and a link already recorded is not counted
        twice. May be called repeatedly while crawling.

        Args:
            source: URL of the linking page.
            targets: URLs the page links to.
        """
        self.graph.add_node(source)
        for target in targets:
            if target == source:
                continue
            self.graph.add_edge(source, target)

    @property
    def page_count(self) -> int:
        return self.graph.number_of_nodes()

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def has_page(self, url: str) -> bool:
        return self.graph.has_node(url)

    def inbound_links_of(self, url: str) -> list[str]:
        """URLs linking to url, in ascending order."""
        if not self.graph.has_node(url):
            return []
        return sorted(self.graph.predecessors(url))

    def outbound_count_of(self, url: str) -> int:
        if not self.graph.has_node(url):
            return 0
        return self.graph.out_degree(url)

    def calc_page_ranks(
        self,
        max_iterations: int = Config.MAX_ITERATIONS,
        damping_factor: float = Config.DAMPING_FACTOR,
        verbose: bool = False,
    ) -> None:
        """Compute the PageRank of every known page.

        Ranks start at 1/N. Each iteration sets, for every page,
        next = d * sum(rank(q) / outdegree(q) for inbound q) + (1 - d) / N
        and stops once no rank moved by more than
        ``Config.CONVERGENCE_THRESHOLD`` or after max_iterations iterations.

        Args:
            max_iterations: Iteration cap for graphs that do not converge.
            damping_factor: Fraction of rank propagated along links.
            verbose: Log every page's rank after each iteration.
        """
        pages = sorted(self.graph.nodes)
        page_count = len(pages)
        if page_count == 0:
            logger.warning("No pages in link graph, skipping PageRank")
            return

        logger.info(
            f"Calculating PageRank for {page_count} pages and "
            f"{self.graph.number_of_edges()} links with damping={damping_factor}"
        )

        # adjacency[i, j] == 1 when pages[i] links to pages[j]
        adjacency = nx.to_numpy_array(self.graph, nodelist=pages, weight=None)
        out_degree = adjacency.sum(axis=1)
        has_outbound = out_degree > 0
        teleport = (1.0 - damping_factor) / page_count

        ranks = np.full(page_count, 1.0 / page_count)
        max_change = 1.0
        iteration = 0
        while max_change > Config.CONVERGENCE_THRESHOLD and iteration < max_iterations:
            share = np.zeros(page_count)
            share[has_outbound] = ranks[has_outbound] / out_degree[has_outbound]
            next_ranks = damping_factor * (adjacency.T @ share) + teleport
            max_change = float(np.max(np.abs(next_ranks - ranks)))
            ranks = next_ranks
            iteration += 1
            if verbose:
                logger.info(f"Iteration {iteration}: max change {max_change:.6g}")
                for url, rank in zip(pages, ranks):
                    logger.info(f"  {url:<40} {rank:.6f}")

        self.iterations = iteration
        self.converged = max_change <= Config.CONVERGENCE_THRESHOLD
        self._ranks = {url: float(rank) for url, rank in zip(pages, ranks)}

        if self.converged:
            logger.info(f"PageRank converged after {iteration} iterations")
        else:
            logger.warning(
                f"PageRank stopped at the iteration cap ({max_iterations}) "
                f"with max change {max_change:.6g}"
            )

    def get_page_rank_of(self, url: str) -> float | None:
        """PageRank of url, or None if the page is unknown.

        Only meaningful after calc_page_ranks().
        """
        if url in self._ranks:
            return self._ranks[url]
        if self.graph.has_node(url):
            return 0.0
        return None

    def get_page_rank_map(self) -> dict[str, float]:
        """All known pages and their PageRank, keyed in ascending URL order."""
        return {url: self._ranks.get(url, 0.0) for url in sorted(self.graph.nodes)}
