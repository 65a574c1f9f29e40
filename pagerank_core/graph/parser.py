"""Plain-text edge list parsing.

Accepts the common whitespace-separated ``source target`` format used by
SNAP and KONECT dumps:

- lines starting with ``#`` or ``%`` are comments, blank lines are skipped
- an optional ``nodes edges`` header as the first data line
- ids may be 0-based or 1-based; 1-based input (no id 0 present) is
  shifted down to 0-based
"""

import logging
from pathlib import Path

import numpy as np

from pagerank_core.graph.types import EdgeList

log = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "%")


class GraphParseError(ValueError):
    """Raised when edge list text cannot be parsed."""


def _parse_line(line: str, line_no: int) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise GraphParseError(
            f"Line {line_no}: expected 2 values, got {len(parts)}: {line!r}"
        )
    try:
        source, target = int(parts[0]), int(parts[1])
    except ValueError:
        raise GraphParseError(
            f"Line {line_no}: node ids must be integers: {line!r}"
        ) from None
    if source < 0 or target < 0:
        raise GraphParseError(
            f"Line {line_no}: node ids must be non-negative: {line!r}"
        )
    return source, target


def _is_header(first: tuple[int, int], rest: list[tuple[int, int]]) -> bool:
    """A first line ``n m`` is a header if m matches the remaining line
    count and n covers every id that follows."""
    if not rest:
        return False
    n, m = first
    if m != len(rest):
        return False
    max_id = max(max(s, t) for s, t in rest)
    return n >= max_id


def parse_edge_list(
    text: str, directed: bool = True, header: bool | None = None
) -> EdgeList:
    """Parse edge list text into a 0-based EdgeList.

    Args:
        text: Edge list contents.
        directed: If False, each non-self-loop edge is also added reversed
            (reverse edges follow all forward edges).
        header: True if the first data line is a ``nodes edges`` header,
            False if it is an edge. None detects it: the line is a header
            when its edge count matches the remaining lines and its node
            count covers every id.

    Returns:
        EdgeList with node_count = max(largest id + 1, header node count).

    Raises:
        GraphParseError: On malformed lines or when no edges are found.
    """
    pairs: list[tuple[int, int]] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        pairs.append(_parse_line(line, line_no))

    header_nodes = 0
    if header is None:
        header = bool(pairs) and _is_header(pairs[0], pairs[1:])
        if header:
            log.info(
                "Treating first line as a header (%d nodes, %d edges); "
                "pass header=False to read it as an edge",
                *pairs[0],
            )
    if header and pairs:
        header_nodes = pairs[0][0]
        pairs = pairs[1:]

    if not pairs:
        raise GraphParseError("Edge list contains no edges")

    edges = np.array(pairs, dtype=np.int64)
    original_max = int(edges.max())
    was_one_based = int(edges.min()) >= 1
    if was_one_based:
        edges -= 1

    node_count = max(int(edges.max()) + 1, header_nodes)

    sources = edges[:, 0]
    targets = edges[:, 1]
    if not directed:
        forward = sources != targets
        sources = np.concatenate([sources, targets[forward]])
        targets = np.concatenate([targets, edges[:, 0][forward]])

    log.info(
        "Parsed edge list: %d nodes, %d edges (%s, %s ids)",
        node_count,
        sources.shape[0],
        "directed" if directed else "undirected",
        "1-based" if was_one_based else "0-based",
    )

    return EdgeList(
        node_count=node_count,
        sources=np.ascontiguousarray(sources),
        targets=np.ascontiguousarray(targets),
        directed=directed,
        was_one_based=was_one_based,
        original_max_node_id=original_max,
    )


def load_edge_list(
    path: str | Path, directed: bool = True, header: bool | None = None
) -> EdgeList:
    """Read and parse an edge list file."""
    return parse_edge_list(Path(path).read_text(), directed=directed, header=header)


def compute_out_degree(edge_list: EdgeList) -> list[int]:
    """Out-degree of every node as a plain list."""
    return np.bincount(
        edge_list.sources, minlength=edge_list.node_count
    ).tolist()


def build_adjacency_list(edge_list: EdgeList) -> list[list[int]]:
    """Per-node target lists in edge order."""
    adjacency: list[list[int]] = [[] for _ in range(edge_list.node_count)]
    for source, target in zip(
        edge_list.sources.tolist(), edge_list.targets.tolist()
    ):
        adjacency[source].append(target)
    return adjacency
