"""
Crossover operator for the genetic assignment solver.

Pools the pairings of all selected parents and greedily rebuilds offspring
from the cheapest pairings that do not clash with the offspring's existing
agents or tasks.
"""

from typing import List, Sequence, Tuple

from .data_models import Assignment, Candidate, RunContext
from .fitness import calculate_total_cost


def is_valid_assignment(new_assignment: Assignment, current_assignments: Sequence[Assignment]) -> bool:
    """
    Check that a pairing shares no row or column with the chosen pairings.

    Args:
        new_assignment: Pairing to add
        current_assignments: Pairings already chosen for the offspring

    Returns:
        True if the pairing can be added
    """
    return not any(new_assignment.conflicts_with(pairing) for pairing in current_assignments)


def find_lowest_cost_assignment(assignments: Sequence[Assignment]) -> Tuple[Assignment, int]:
    """
    Find the cheapest pairing, keeping the first one on ties.

    Args:
        assignments: Non-empty sequence of pairings

    Returns:
        Tuple of (lowest_cost_pairing, index)
    """
    if not assignments:
        raise ValueError("Cannot pick from an empty list of assignments")

    lowest_index = 0
    for index in range(1, len(assignments)):
        if assignments[index].cost < assignments[lowest_index].cost:
            lowest_index = index
    return assignments[lowest_index], lowest_index


def fill_remaining_offspring(
    offspring: List[Candidate],
    max_length: int,
    context: RunContext
) -> List[Candidate]:
    """
    Pad offspring with copies of randomly chosen offspring up to max_length.

    Args:
        offspring: Non-empty list of completed offspring
        max_length: Target number of offspring
        context: Run context providing the rng

    Returns:
        The same offspring list, padded
    """
    while len(offspring) < max_length:
        chosen = offspring[context.rng.int_between(0, len(offspring) - 1)]
        offspring.append(chosen.copy())
    return offspring


def crossover(parents: List[Candidate], context: RunContext) -> List[Candidate]:
    """
    Create offspring from the pooled pairings of all parents.

    Offspring are built one at a time from a shared pool holding every
    parent's pairings. Each step takes the cheapest pairing that is valid for
    the offspring and removes it from the pool. An offspring that runs out of
    valid pairings before reaching full length is dropped. This continues
    until the pool is empty.

    Args:
        parents: Selected parents
        context: Run context

    Returns:
        offspring + parents when at least one offspring was completed
        (offspring padded to len(parents)), otherwise parents unchanged.
        Offspring distances are left for the caller to compute.
    """
    if len(parents) <= 1:
        return parents

    pool = [pairing for parent in parents for pairing in parent.assignment]
    assignment_length = len(parents[0].assignment)
    offspring_max_length = len(parents)

    if assignment_length <= 0:
        raise ValueError("Parents hold no assignments to recombine")

    offspring = []

    while pool:
        new_assignment = []

        while len(new_assignment) < assignment_length:
            valid = [
                (pool_index, pairing)
                for pool_index, pairing in enumerate(pool)
                if is_valid_assignment(pairing, new_assignment)
            ]

            if not valid:
                break

            lowest, valid_index = find_lowest_cost_assignment([pairing for _, pairing in valid])
            new_assignment.append(lowest)

            # Taken pairings leave the pool so later offspring differ
            del pool[valid[valid_index][0]]

        if len(new_assignment) == assignment_length:
            offspring.append(
                Candidate(
                    assignment=new_assignment,
                    total_cost=calculate_total_cost(new_assignment)
                )
            )

    if len(offspring) != offspring_max_length:
        context.log(
            f"\tOffspring padded with {offspring_max_length - len(offspring)} duplicates."
        )

        if not offspring:
            return parents

        fill_remaining_offspring(offspring, offspring_max_length, context)

    return offspring + parents
