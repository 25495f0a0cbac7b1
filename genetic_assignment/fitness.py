"""
Fitness ("distance") scoring for candidate solutions.

Lower distance is better. Group cap violations raise the score
exponentially so constraint-violating candidates are dominated out of the
population.
"""

from typing import List, Sequence

from .data_models import Assignment, Candidate, Group


def calculate_total_cost(assignment: Sequence[Assignment]) -> float:
    """Sum of the pairing costs."""
    return sum(pairing.cost for pairing in assignment)


def count_group_assignments(candidate: Candidate, groups: Sequence[Group]) -> List[int]:
    """
    Count how many of the candidate's pairings fall in each group.

    Args:
        candidate: Candidate to inspect
        groups: Group constraints

    Returns:
        One count per group, in group order
    """
    return [group.count_assignments(candidate) for group in groups]


def surplus_assignments(candidate: Candidate, groups: Sequence[Group]) -> int:
    """
    Number of pairings above the group caps, summed across groups.

    A group capped at 2 that receives 3 pairings contributes a surplus of 1.
    Groups at or under their cap contribute nothing.
    """
    counts = count_group_assignments(candidate, groups)
    return sum(
        max(count - group.max_assignments, 0)
        for count, group in zip(counts, groups)
    )


def calculate_distance(total_cost: float, possible_assignments: int, surplus: int) -> float:
    """
    Distance formula: (cost / possible + 1) ^ (surplus + 1).

    Args:
        total_cost: Total cost of the candidate
        possible_assignments: Number of pairings the candidate holds
        surplus: Surplus assignments across all groups

    Returns:
        Distance score, 1.0 for a zero cost candidate with no surplus

    Raises:
        ValueError: If the candidate holds no pairings
    """
    if possible_assignments <= 0:
        raise ValueError("Cannot score a candidate with no assignments")

    cost_task_ratio = total_cost / possible_assignments
    return (cost_task_ratio + 1) ** (surplus + 1)


def distance(candidate: Candidate, groups: Sequence[Group]) -> Candidate:
    """
    Score a candidate and store the result on it.

    Must be called again whenever the assignment or total cost changes.

    Args:
        candidate: Candidate to score
        groups: Group constraints for the run

    Returns:
        The same candidate with distance updated
    """
    surplus = surplus_assignments(candidate, groups)
    candidate.distance = calculate_distance(
        candidate.total_cost,
        len(candidate.assignment),
        surplus
    )
    return candidate


def evaluate_population(population: List[Candidate], groups: Sequence[Group]) -> List[Candidate]:
    """Recompute the distance of every candidate in place."""
    for candidate in population:
        distance(candidate, groups)
    return population


def sort_by_distance(population: List[Candidate]) -> List[Candidate]:
    """
    Sort candidates by ascending distance in place.

    The sort is stable so equal distances keep their current order.
    """
    population.sort(key=lambda candidate: candidate.distance)
    return population
