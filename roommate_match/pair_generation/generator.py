"""
Pair generation for batch compatibility scoring.

This module produces the (Profile A, Profile B) pairs scored by the
batch report.

Key Design Decisions:
- Pairs are unordered: scoring is symmetric, so (A, B) and (B, A) are the same pair
- Self-pairs are excluded: (A, A) is never generated
- Every pair is used when the population is small enough; above
  max_pairs a uniform random subset is drawn
- Reproducible given a random seed
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class PairGenerator:
    """
    Generator for unordered profile pairs.

    Attributes:
        max_pairs: Maximum number of pairs to generate
        random_state: Numpy RandomState for reproducibility
    """

    def __init__(self, max_pairs: int = 200000, random_seed: Optional[int] = None):
        """
        Initialize the pair generator.

        Args:
            max_pairs: Maximum number of pairs to generate
            random_seed: Random seed for reproducibility
        """
        if max_pairs < 1:
            raise ValueError(f"max_pairs must be positive, got {max_pairs}")
        self.max_pairs = max_pairs
        self.random_state = np.random.RandomState(random_seed)

    def generate_pairs(self, n_persons: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate pairs of person indices.

        The number of pairs generated is:
        min(max_pairs, n_persons * (n_persons - 1) / 2)

        Args:
            n_persons: Total number of profiles

        Returns:
            Tuple of (indices_a, indices_b) arrays where each (indices_a[i], indices_b[i])
            represents a pair. Indices satisfy indices_a[i] < indices_b[i] and pairs are
            sorted lexicographically.
        """
        max_possible = n_persons * (n_persons - 1) // 2
        target_pairs = min(self.max_pairs, max_possible)

        logger.info(f"Generating {target_pairs} pairs from {n_persons} profiles")
        if target_pairs == 0:
            return np.array([], dtype=int), np.array([], dtype=int)

        if target_pairs >= max_possible * 0.5:
            return self._generate_by_enumeration(n_persons, target_pairs)
        return self._generate_by_sampling(n_persons, target_pairs)

    def _generate_by_enumeration(
        self, n_persons: int, target_pairs: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate pairs by enumerating all and sampling.

        More efficient when we need a large fraction of all possible pairs.
        """
        indices_a, indices_b = np.triu_indices(n_persons, k=1)

        if target_pairs < len(indices_a):
            sample_idx = np.sort(self.random_state.choice(
                len(indices_a), size=target_pairs, replace=False
            ))
            indices_a = indices_a[sample_idx]
            indices_b = indices_b[sample_idx]

        logger.info(f"Generated {len(indices_a)} pairs by enumeration")
        return indices_a, indices_b

    def _generate_by_sampling(
        self, n_persons: int, target_pairs: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate pairs by rejection sampling.

        More efficient when we need a small fraction of all possible pairs.
        """
        pairs_set = set()
        batch_size = min(target_pairs * 2, 1000000)

        while len(pairs_set) < target_pairs:
            a = self.random_state.randint(0, n_persons, size=batch_size)
            b = self.random_state.randint(0, n_persons, size=batch_size)

            for i in range(batch_size):
                if a[i] != b[i]:
                    pairs_set.add((int(min(a[i], b[i])), int(max(a[i], b[i]))))
                    if len(pairs_set) >= target_pairs:
                        break

        pairs_list = sorted(pairs_set)
        indices_a = np.array([p[0] for p in pairs_list])
        indices_b = np.array([p[1] for p in pairs_list])

        logger.info(f"Generated {len(indices_a)} pairs by sampling")
        return indices_a, indices_b

    def generate_id_pairs(self, ids: Sequence[str]) -> List[Tuple[str, str]]:
        """
        Generate pairs of profile ids.

        Args:
            ids: Profile ids in a fixed order

        Returns:
            List of (id_a, id_b) tuples, id_a preceding id_b in ids
        """
        indices_a, indices_b = self.generate_pairs(len(ids))
        return [(ids[i], ids[j]) for i, j in zip(indices_a, indices_b)]


def generate_pairs_for_profiles(
    profiles: Dict[str, object],
    config: dict
) -> List[Tuple[str, str]]:
    """
    Convenience function to generate profile id pairs from config.

    Args:
        profiles: Profile id -> profile, in a fixed order
        config: Configuration dictionary with evaluation settings

    Returns:
        List of (id_a, id_b) tuples
    """
    evaluation_config = config.get("evaluation", {})

    generator = PairGenerator(
        max_pairs=evaluation_config.get("max_pairs", 200000),
        random_seed=evaluation_config.get("random_seed", 42)
    )
    return generator.generate_id_pairs(list(profiles.keys()))
