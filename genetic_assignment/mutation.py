"""
Mutation operator for the genetic assignment solver.

A mutated candidate has its whole assignment replaced by a fresh random one;
there is no point perturbation, so mutated candidates keep no lineage.
"""

from typing import List

from .data_models import Candidate, RunContext
from .fitness import calculate_total_cost, distance
from .population import random_assignment


def mutate(
    population: List[Candidate],
    mutation_chance: float,
    context: RunContext
) -> List[Candidate]:
    """
    Replace each candidate's assignment with probability mutation_chance.

    Args:
        population: Candidates to mutate in place
        mutation_chance: Probability in [0, 1] for each candidate
        context: Run context

    Returns:
        The same population list
    """
    mutations = 0
    for candidate in population:
        if context.rng.real_between(0, 1) < mutation_chance:
            mutations += 1
            candidate.assignment = random_assignment(context)
            candidate.total_cost = calculate_total_cost(candidate.assignment)
            distance(candidate, context.groups)

    context.log(f"\tMutated: {mutations}")
    return population
