"""
Fruchterman-Reingold force model.

Computes the net displacement of every node for one iteration:
- every pair of distinct nodes repels with magnitude k^2 / d
- every edge attracts its endpoints with magnitude d^2 / k

Positions are an (n, 2) float64 array; topology is a pair of parallel
index arrays. The all-pairs repulsion is evaluated with numpy broadcasting
in a single pass.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


class ForceModel:
    """
    Repulsive and attractive forces of the Fruchterman-Reingold model.

    Coincident nodes (distance below epsilon) are pushed apart along a
    random direction drawn from the supplied generator, with opposite
    directions for the two nodes of a pair, so seeded runs stay
    reproducible and locked pairs still separate.

    Example:
        model = ForceModel(k=1.0, rng=np.random.default_rng(0))
        disp = model.forces(positions, sources, targets)
    """

    def __init__(
        self,
        k: float,
        *,
        epsilon: float = 1e-9,
        repulsion_cutoff: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Args:
            k: Ideal spring length
            epsilon: Distance substituted for coincident nodes
            repulsion_cutoff: Skip repulsion beyond ``repulsion_cutoff * k``
            rng: Generator for coincident-node directions
        """
        self.k = float(k)
        self.epsilon = float(epsilon)
        self.repulsion_cutoff = repulsion_cutoff
        self.rng = rng if rng is not None else np.random.default_rng(0)
        self.evaluations = 0

    def forces(
        self,
        positions: np.ndarray,
        sources: np.ndarray,
        targets: np.ndarray,
    ) -> np.ndarray:
        """
        Net displacement of every node.

        Args:
            positions: (n, 2) current coordinates
            sources: Edge source indices
            targets: Edge target indices

        Returns:
            (n, 2) displacement array (not yet limited by temperature)
        """
        self.evaluations += 1
        disp = self.repulsive(positions)
        disp += self.attractive(positions, sources, targets)
        return disp

    def repulsive(self, positions: np.ndarray) -> np.ndarray:
        """Sum of k^2 / d repulsion from all other nodes, as (n, 2)."""
        n = len(positions)
        if n < 2:
            return np.zeros((n, 2), dtype=np.float64)

        # delta[i, j] points from node j to node i
        delta = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        dist = np.hypot(delta[..., 0], delta[..., 1])

        upper_i, upper_j = np.triu_indices(n, k=1)
        coincident = dist[upper_i, upper_j] < self.epsilon
        if np.any(coincident):
            ci = upper_i[coincident]
            cj = upper_j[coincident]
            angles = self.rng.uniform(0.0, 2.0 * np.pi, size=len(ci))
            direction = np.stack([np.cos(angles), np.sin(angles)], axis=1) * self.epsilon
            delta[ci, cj] = direction
            delta[cj, ci] = -direction
            dist[ci, cj] = self.epsilon
            dist[cj, ci] = self.epsilon

        np.fill_diagonal(dist, np.inf)
        # (delta / d) * (k^2 / d); (k / d) ** 2 stays finite for large k
        factor = (self.k / dist) ** 2
        if self.repulsion_cutoff is not None:
            factor[dist >= self.repulsion_cutoff * self.k] = 0.0
        return np.einsum("ij,ijk->ik", factor, delta)

    def attractive(
        self,
        positions: np.ndarray,
        sources: np.ndarray,
        targets: np.ndarray,
    ) -> np.ndarray:
        """Sum of d^2 / k edge attraction, as (n, 2). Duplicate edges add up."""
        disp = np.zeros_like(positions, dtype=np.float64)
        if len(sources) == 0:
            return disp

        delta = positions[sources] - positions[targets]
        dist = np.hypot(delta[:, 0], delta[:, 1])
        # (delta / d) * (d^2 / k); a self-loop has delta == 0 and adds nothing
        pull = delta * (dist / self.k)[:, np.newaxis]
        np.add.at(disp, sources, -pull)
        np.add.at(disp, targets, pull)
        return disp

    def __repr__(self) -> str:
        return (
            f"ForceModel(k={self.k}, epsilon={self.epsilon}, "
            f"repulsion_cutoff={self.repulsion_cutoff})"
        )


__all__ = ["ForceModel"]
