"""Top-N node extraction from a score vector."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class TopNode:
    node_id: int
    score: float
    rank: int  # 1-indexed


def top_nodes(scores: np.ndarray | list[float], count: int = 10) -> list[TopNode]:
    """Highest-scoring nodes, best first; equal scores keep id order."""
    scores = np.asarray(scores, dtype=np.float64)
    order = np.argsort(-scores, kind="stable")[:count]
    return [
        TopNode(node_id=int(i), score=float(scores[i]), rank=r)
        for r, i in enumerate(order, start=1)
    ]
