"""Seed handling for reproducible Monte Carlo runs.

Every computation gets its own numpy Generator built from an explicit
seed. Nothing here touches the process-global NumPy or ``random`` state,
so concurrent runs cannot perturb each other and a result depends only
on its inputs, not on call history.
"""

import numpy as np

MAX_SEED = 2**32  # seeds are unsigned 32-bit integers


def make_rng(seed: int) -> np.random.Generator:
    """Create an instance-local PCG64 Generator for ``seed``.

    Args:
        seed: Unsigned 32-bit seed value.

    Returns:
        A fresh numpy Generator.
    """
    return np.random.default_rng(int(seed))


def random_seed() -> int:
    """Draw a fresh unsigned 32-bit seed from OS entropy.

    Backs the runner's --random-seed flag; the drawn value lands in the
    run config so it is recorded alongside the result.
    """
    return int(np.random.default_rng().integers(0, MAX_SEED))


def verify_seed_determinism(seed: int) -> bool:
    """Verify that two Generators built from ``seed`` produce the same draws.

    Generates 10 floats and 10 bounded integers from each and compares.
    This is the self-test that proves seed control works.

    Args:
        seed: Seed value to test.

    Returns:
        True if both Generators produce identical sequences.
    """
    rng1 = make_rng(seed)
    a1 = rng1.random(10).tolist()
    b1 = rng1.integers(0, 1000, size=10).tolist()

    rng2 = make_rng(seed)
    a2 = rng2.random(10).tolist()
    b2 = rng2.integers(0, 1000, size=10).tolist()

    return a1 == a2 and b1 == b2
