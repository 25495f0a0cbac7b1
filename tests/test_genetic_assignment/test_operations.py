"""
Tests for GA operations: random source, fitness, population, mutation,
crossover and selection.
"""

import math
import unittest

from genetic_assignment.data_models import Assignment, Candidate, Group, GeneticOptions
from genetic_assignment.rng import SeededRandom, normalize_seed
from genetic_assignment.orchestration import build_run_context
from genetic_assignment.validation import InvalidInputError
from genetic_assignment.fitness import (
    calculate_distance,
    calculate_total_cost,
    distance,
    sort_by_distance,
    surplus_assignments,
)
from genetic_assignment.population import (
    generate_population,
    get_groups,
    get_max_column_assignments,
    overlapping_columns,
    random_assignment,
)
from genetic_assignment.mutation import mutate
from genetic_assignment.crossover import (
    crossover,
    find_lowest_cost_assignment,
    is_valid_assignment,
)
from genetic_assignment.selection import (
    select_parent_by_roulette,
    select_parents,
    selection_weights,
)


SQUARE = [[1, 2, 3], [2, 1, 3], [3, 3, 1]]
NAMES = ['x', 'y', 'z']


def make_candidate(pairings, groups=()):
    """Build an evaluated candidate from (row, col, cost) tuples."""
    assignment = [Assignment(row, col, cost) for row, col, cost in pairings]
    candidate = Candidate(assignment=assignment, total_cost=calculate_total_cost(assignment))
    return distance(candidate, list(groups))


class TestSeededRandom(unittest.TestCase):
    """Test the seeded random source."""

    def test_same_seed_same_sequence(self):
        """Two sources with one seed produce identical draws."""
        a = SeededRandom(42)
        b = SeededRandom(42)

        draws_a = [(a.int_between(0, 9), a.real_between(0, 1)) for _ in range(20)]
        draws_b = [(b.int_between(0, 9), b.real_between(0, 1)) for _ in range(20)]

        self.assertEqual(draws_a, draws_b)

    def test_int_between_is_inclusive(self):
        """Both bounds are reachable."""
        rng = SeededRandom(7)
        values = {rng.int_between(0, 2) for _ in range(200)}
        self.assertEqual(values, {0, 1, 2})

        self.assertEqual(rng.int_between(3, 3), 3)

    def test_real_between_range(self):
        rng = SeededRandom(7)
        for _ in range(100):
            value = rng.real_between(2.0, 5.0)
            self.assertGreaterEqual(value, 2.0)
            self.assertLess(value, 5.0)

    def test_empty_range_rejected(self):
        rng = SeededRandom(1)
        with self.assertRaises(ValueError):
            rng.int_between(5, 4)

    def test_string_seeds(self):
        """Numeric strings map to their integer, other strings hash stably."""
        self.assertEqual(normalize_seed("42"), 42)
        self.assertEqual(normalize_seed("run-a"), normalize_seed("run-a"))
        self.assertNotEqual(normalize_seed("run-a"), normalize_seed("run-b"))
        self.assertIsNone(normalize_seed(None))

    def test_negative_seeds_differ_from_positive(self):
        self.assertNotEqual(normalize_seed(-42), normalize_seed(42))
        self.assertEqual(normalize_seed(-42), normalize_seed("-42"))
        self.assertGreaterEqual(normalize_seed(-42), 0)

        rng_neg = SeededRandom(-42)
        rng_pos = SeededRandom(42)
        self.assertNotEqual(
            [rng_neg.int_between(0, 1000) for _ in range(10)],
            [rng_pos.int_between(0, 1000) for _ in range(10)]
        )


class TestFitness(unittest.TestCase):
    """Test distance scoring."""

    def setUp(self):
        self.groups = [Group(cols=(0, 1), max_assignments=1, name='kiln')]

    def test_zero_cost_no_surplus_is_minimum(self):
        candidate = make_candidate([(0, 0, 0), (1, 1, 0)])
        self.assertEqual(candidate.distance, 1.0)

    def test_distance_formula(self):
        """(cost / possible + 1) ^ (surplus + 1)."""
        self.assertEqual(calculate_distance(3, 3, 0), 2.0)
        self.assertEqual(calculate_distance(3, 3, 1), 4.0)
        self.assertAlmostEqual(calculate_distance(8, 3, 0), 8 / 3 + 1)

    def test_monotonic_in_cost(self):
        previous = calculate_distance(0, 4, 1)
        for cost in range(1, 20):
            current = calculate_distance(cost, 4, 1)
            self.assertGreaterEqual(current, previous)
            previous = current

    def test_surplus_strictly_increases_distance(self):
        for cost in [0.5, 1, 7]:
            self.assertLess(calculate_distance(cost, 3, 0), calculate_distance(cost, 3, 1))
            self.assertLess(calculate_distance(cost, 3, 1), calculate_distance(cost, 3, 2))

    def test_surplus_counts_group_excess(self):
        violating = make_candidate([(0, 0, 1), (1, 1, 1)], self.groups)
        within = make_candidate([(0, 0, 1), (1, 2, 1)], self.groups)

        self.assertEqual(surplus_assignments(violating, self.groups), 1)
        self.assertEqual(surplus_assignments(within, self.groups), 0)

    def test_violation_dominates_cheaper_or_equal_candidates(self):
        """A violating candidate scores worse than a valid one of equal or lower cost."""
        violating = make_candidate([(0, 0, 1), (1, 1, 1)], self.groups)
        equal_cost = make_candidate([(0, 0, 1), (1, 2, 1)], self.groups)

        self.assertGreater(violating.distance, equal_cost.distance)

    def test_no_groups_means_no_surplus(self):
        candidate = make_candidate([(0, 0, 2), (1, 1, 2)])
        self.assertEqual(candidate.distance, 3.0)

    def test_distance_refreshes_after_change(self):
        candidate = make_candidate([(0, 0, 1), (1, 1, 1)])
        candidate.assignment = [Assignment(0, 0, 5), Assignment(1, 1, 5)]
        candidate.total_cost = 10
        distance(candidate, [])
        self.assertEqual(candidate.distance, 6.0)

    def test_empty_assignment_rejected(self):
        with self.assertRaises(ValueError):
            calculate_distance(0, 0, 0)

    def test_sort_by_distance(self):
        population = [
            make_candidate([(0, 0, 9)]),
            make_candidate([(0, 0, 1)]),
            make_candidate([(0, 0, 4)]),
        ]
        ordered = sort_by_distance(population)
        self.assertEqual([c.total_cost for c in ordered], [1, 4, 9])


class TestPopulation(unittest.TestCase):
    """Test group derivation and random population generation."""

    def test_get_groups_maps_task_ids(self):
        groups = get_groups(
            [{'maxAssignments': 1, 'tasks': ['y', {'taskId': 'z'}], 'name': 'pair'}],
            NAMES
        )

        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].cols, (1, 2))
        self.assertEqual(groups[0].max_assignments, 1)
        self.assertEqual(groups[0].name, 'pair')

    def test_get_groups_unknown_task(self):
        with self.assertRaises(ValueError):
            get_groups([{'maxAssignments': 1, 'tasks': ['nope']}], NAMES)

    def test_max_column_assignments(self):
        self.assertEqual(get_max_column_assignments(4, []), 4)

        groups = [
            Group(cols=(0, 1), max_assignments=1),
            Group(cols=(2, 3), max_assignments=1),
        ]
        self.assertEqual(get_max_column_assignments(4, groups), 2)

        groups = [Group(cols=(0, 1, 2), max_assignments=2)]
        self.assertEqual(get_max_column_assignments(5, groups), 4)

    def test_overlapping_columns(self):
        disjoint = [Group(cols=(0, 1), max_assignments=1), Group(cols=(2,), max_assignments=1)]
        self.assertEqual(overlapping_columns(disjoint), [])

        shared = [Group(cols=(0, 1), max_assignments=1), Group(cols=(0, 1, 2), max_assignments=1)]
        self.assertEqual(overlapping_columns(shared), [0, 1])
        self.assertEqual(get_max_column_assignments(3, shared), -1)

    def test_overlap_leaving_nothing_assignable(self):
        options = GeneticOptions(seed=1, groups=[
            {'maxAssignments': 1, 'tasks': ['x', 'y']},
            {'maxAssignments': 1, 'tasks': ['x', 'y', 'z']},
        ])
        with self.assertRaises(InvalidInputError):
            build_run_context(SQUARE, NAMES, options)

    def test_random_assignment_walks_diagonally(self):
        context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=42))
        assignment = random_assignment(context)

        self.assertEqual(len(assignment), context.max_assignments)
        for current, following in zip(assignment, assignment[1:]):
            self.assertEqual(following.row, (current.row + 1) % context.rows)
            self.assertEqual(following.col, (current.col + 1) % context.cols)
        for pairing in assignment:
            self.assertEqual(pairing.cost, SQUARE[pairing.row][pairing.col])

    def test_random_assignment_square_is_valid(self):
        context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=3))
        for _ in range(20):
            candidate = Candidate(assignment=random_assignment(context))
            self.assertTrue(candidate.is_structurally_valid(context.max_assignments))

    def test_random_assignment_can_repeat_columns(self):
        """A cap larger than its group lets the wrapping walk revisit columns."""
        matrix = [[1, 2], [2, 1], [1, 1], [2, 2]]
        options = GeneticOptions(seed=5, groups=[{'maxAssignments': 3, 'tasks': ['a']}])
        context = build_run_context(matrix, ['a', 'b'], options)

        self.assertEqual(context.max_assignments, 4)
        candidate = Candidate(assignment=random_assignment(context))
        self.assertEqual(len(candidate.assignment), 4)
        self.assertFalse(candidate.is_structurally_valid())

    def test_generate_population(self):
        context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=42))
        population = generate_population(10, context)

        self.assertEqual(len(population), 10)
        for candidate in population:
            self.assertEqual(candidate.total_cost, calculate_total_cost(candidate.assignment))
            self.assertIsNone(candidate.distance)

    def test_no_assignable_pairings(self):
        options = GeneticOptions(seed=1, groups=[{'maxAssignments': 0, 'tasks': NAMES}])
        context = build_run_context(SQUARE, NAMES, options)

        self.assertEqual(context.max_assignments, 0)
        with self.assertRaises(ValueError):
            random_assignment(context)


class TestMutation(unittest.TestCase):
    """Test the mutation operator."""

    def setUp(self):
        self.context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=42))
        self.population = generate_population(6, self.context)
        for candidate in self.population:
            distance(candidate, self.context.groups)

    def test_zero_chance_leaves_population(self):
        before = [candidate.copy() for candidate in self.population]
        result = mutate(self.population, 0.0, self.context)

        self.assertIs(result, self.population)
        self.assertEqual(result, before)
        self.assertEqual(self.context.run_log[-1], "\tMutated: 0")

    def test_full_chance_mutates_all(self):
        result = mutate(self.population, 1.0, self.context)

        self.assertEqual(self.context.run_log[-1], "\tMutated: 6")
        for candidate in result:
            self.assertEqual(candidate.total_cost, calculate_total_cost(candidate.assignment))
            self.assertEqual(
                candidate.distance,
                calculate_distance(candidate.total_cost, len(candidate.assignment), 0)
            )


class TestCrossover(unittest.TestCase):
    """Test the pooled greedy crossover."""

    def setUp(self):
        self.context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=42))

    def test_single_parent_is_noop(self):
        parent = make_candidate([(0, 0, 1), (1, 1, 1), (2, 2, 1)])
        parents = [parent]
        self.assertIs(crossover(parents, self.context), parents)
        self.assertEqual(crossover(parents, self.context), [parent])

    def test_helpers(self):
        chosen = [Assignment(0, 0, 1)]
        self.assertTrue(is_valid_assignment(Assignment(1, 1, 1), chosen))
        self.assertFalse(is_valid_assignment(Assignment(0, 2, 1), chosen))
        self.assertFalse(is_valid_assignment(Assignment(2, 0, 1), chosen))
        self.assertTrue(is_valid_assignment(Assignment(0, 0, 1), []))
        self.assertTrue(Assignment(0, 2, 1).conflicts_with(Assignment(0, 0, 1)))
        self.assertFalse(Assignment(1, 2, 1).conflicts_with(Assignment(0, 0, 1)))

        lowest, index = find_lowest_cost_assignment(
            [Assignment(0, 1, 3), Assignment(1, 0, 2), Assignment(2, 2, 2)]
        )
        self.assertEqual(index, 1)
        self.assertEqual(lowest, Assignment(1, 0, 2))

    def test_offspring_built_from_cheapest_pairings(self):
        diagonal = make_candidate([(0, 0, 1), (1, 1, 1), (2, 2, 1)])
        shifted = make_candidate([(0, 1, 2), (1, 2, 3), (2, 0, 3)])

        result = crossover([diagonal, shifted], self.context)

        self.assertEqual(len(result), 4)
        first, second = result[0], result[1]
        self.assertEqual(
            first.assignment,
            [Assignment(0, 0, 1), Assignment(1, 1, 1), Assignment(2, 2, 1)]
        )
        self.assertEqual(first.total_cost, 3)
        self.assertEqual(
            second.assignment,
            [Assignment(0, 1, 2), Assignment(1, 2, 3), Assignment(2, 0, 3)]
        )
        self.assertEqual(second.total_cost, 8)
        self.assertIsNone(first.distance)

        # Parents are appended after the offspring
        self.assertIs(result[2], diagonal)
        self.assertIs(result[3], shifted)

    def test_incomplete_offspring_are_padded(self):
        parent_a = make_candidate([(0, 0, 1), (1, 1, 5)])
        parent_b = make_candidate([(1, 2, 1), (2, 1, 5)])

        result = crossover([parent_a, parent_b], self.context)

        self.assertEqual(len(result), 4)
        self.assertEqual(result[0].assignment, [Assignment(0, 0, 1), Assignment(1, 2, 1)])
        self.assertEqual(result[1].assignment, result[0].assignment)
        self.assertIsNot(result[1], result[0])
        self.assertIs(result[2], parent_a)
        self.assertIn("\tOffspring padded with 1 duplicates.", self.context.run_log)

    def test_no_completed_offspring_returns_parents(self):
        parent_a = Candidate(assignment=[Assignment(0, 0, 1), Assignment(0, 1, 2)], total_cost=3)
        parent_b = Candidate(assignment=[Assignment(0, 2, 3), Assignment(0, 0, 4)], total_cost=7)
        parents = [parent_a, parent_b]

        self.assertIs(crossover(parents, self.context), parents)

    def test_offspring_are_structurally_valid(self):
        population = generate_population(8, self.context)
        parents = population[:4]
        assignment_length = len(parents[0].assignment)

        result = crossover(parents, self.context)
        offspring = result[:len(result) - len(parents)]

        for child in offspring:
            self.assertTrue(child.is_structurally_valid())
            self.assertLessEqual(len(child.assignment), assignment_length)


class TestSelection(unittest.TestCase):
    """Test inverted roulette selection."""

    def setUp(self):
        self.context = build_run_context(SQUARE, NAMES, GeneticOptions(seed=42))

    def test_weights_are_inverse_distance(self):
        population = [
            make_candidate([(0, 0, 1)]),
            make_candidate([(0, 0, 3)]),
        ]
        weights = selection_weights(population)
        self.assertAlmostEqual(weights[0], 1 / 2)
        self.assertAlmostEqual(weights[1], 1 / 4)

    def test_select_parents_size_and_membership(self):
        for size in [1, 4, 5, 10]:
            population = [make_candidate([(0, 0, cost)]) for cost in range(size)]
            parents = select_parents(population, self.context)

            self.assertEqual(len(parents), math.ceil(size / 2))
            for parent in parents:
                self.assertTrue(any(parent is candidate for candidate in population))

    def test_roulette_scans_from_the_end(self):
        self.assertEqual(select_parent_by_roulette([0.0, 0.0, 5.0], self.context), 2)

    def test_roulette_falls_back_to_first(self):
        self.assertEqual(select_parent_by_roulette([5.0, 0.0, 0.0], self.context), 0)


if __name__ == '__main__':
    unittest.main()
