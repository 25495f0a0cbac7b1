"""
Parent selection for the genetic assignment solver.

Fitness proportionate (roulette wheel) selection, inverted because a lower
distance is fitter.
"""

import math
from typing import List, Sequence

from .data_models import Candidate, RunContext


def selection_weights(population: Sequence[Candidate]) -> List[float]:
    """
    Selection weight of each candidate, larger for smaller distance.

    Args:
        population: Evaluated candidates

    Returns:
        One weight per candidate
    """
    total_distance = sum(candidate.distance for candidate in population)
    return [
        total_distance / (candidate.distance * total_distance)
        for candidate in population
    ]


def select_parent_by_roulette(weights: Sequence[float], context: RunContext) -> int:
    """
    Spin the roulette wheel once.

    A point is drawn in [0, sum(weights)] and weights are subtracted from it
    scanning from the last candidate toward the first; the index where the
    remainder drops below zero wins. Index 0 is returned if the scan ends
    without a hit.

    Args:
        weights: Selection weights
        context: Run context providing the rng

    Returns:
        Index of the selected candidate
    """
    section = context.rng.real_between(0, sum(weights))

    for index in range(len(weights) - 1, 0, -1):
        section -= weights[index]
        if section < 0:
            return index

    return 0


def select_parents(population: List[Candidate], context: RunContext) -> List[Candidate]:
    """
    Select ceil(len(population) / 2) parents with replacement.

    Args:
        population: Evaluated candidates
        context: Run context

    Returns:
        List of selected candidates (the same candidate may appear repeatedly)
    """
    weights = selection_weights(population)
    target = math.ceil(len(population) / 2)

    parents = []
    while len(parents) < target:
        parents.append(population[select_parent_by_roulette(weights, context)])

    return parents
