"""
Orchestration module for the genetic assignment solver.

Adapts solver input into a run context, drives the generation loop and
formats the best candidates for the caller.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .data_models import Candidate, GeneticOptions, RunContext
from .rng import SeededRandom
from .validation import InvalidInputError, is_agent_data, validate_genetic_input, validate_options
from .population import (
    generate_population,
    get_groups,
    get_max_column_assignments,
    overlapping_columns,
)
from .fitness import evaluate_population, sort_by_distance
from .mutation import mutate
from .selection import select_parents
from .crossover import crossover
from .results import get_top_results_with_dummy_names, get_top_results_with_real_agents


INVALID_INPUT = "invalid_input"
ALGORITHM_FAILURE = "algorithm_failure"


@dataclass
class GeneticError:
    """
    Error value returned by start() instead of raising.

    Attributes:
        code: INVALID_INPUT or ALGORITHM_FAILURE
        message: Human readable description
    """
    code: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.code, "message": self.message}


def prepare_problem(
    data: Sequence[Any],
    row_names: Optional[Sequence[Any]] = None,
    col_names: Optional[Sequence[Any]] = None
) -> Tuple[List[List[float]], List[Any], List[Any], bool]:
    """
    Turn validated input into a cost matrix with row and column names.

    Args:
        data: Agents with answers, or a raw cost matrix
        row_names: Agent names for matrix input
        col_names: Task names for matrix input

    Returns:
        Tuple of (matrix, row_names, col_names, real_agents)
    """
    if is_agent_data(data):
        matrix = [[answer["cost"] for answer in agent["answers"]] for agent in data]
        names_of_rows = [agent["agentId"] for agent in data]
        names_of_cols = [answer["taskId"] for answer in data[0]["answers"]]
        return matrix, names_of_rows, names_of_cols, True

    matrix = [list(row) for row in data]
    return matrix, list(row_names), list(col_names), False


def build_run_context(
    matrix: Sequence[Sequence[float]],
    col_names: Sequence[Any],
    options: GeneticOptions,
    verbose: bool = False
) -> RunContext:
    """
    Create the run-scoped context for one solver run.

    Args:
        matrix: Cost matrix
        col_names: Task identifier of each column
        options: Solver options
        verbose: Print log messages

    Returns:
        RunContext with groups, rng and assignment limits set

    Raises:
        InvalidInputError: If overlapping groups leave no task assignable
    """
    groups = get_groups(options.groups, col_names)
    rows = len(matrix)
    cols = len(matrix[0])

    max_column_assignments = get_max_column_assignments(cols, groups)
    if max_column_assignments <= 0:
        shared = overlapping_columns(groups)
        if shared:
            raise InvalidInputError(
                f"Groups overlap on tasks {[col_names[col] for col in shared]}; "
                f"no task is left assignable"
            )

    max_assignments = min(rows, max_column_assignments)

    return RunContext(
        cost_matrix=matrix,
        groups=groups,
        rng=SeededRandom(options.seed),
        max_column_assignments=max_column_assignments,
        max_assignments=max_assignments,
        verbose=verbose
    )


def advance_generation(
    population: List[Candidate],
    mutation_chance: float,
    context: RunContext
) -> List[Candidate]:
    """
    Produce the next generation from an evaluated population.

    Sort, mutate, re-evaluate, select parents and cross them over. If
    crossover yields fewer candidates than the current population, the
    mutated population carries over instead.

    Args:
        population: Evaluated candidates
        mutation_chance: Probability of mutating each candidate
        context: Run context

    Returns:
        Evaluated next generation
    """
    sorted_candidates = sort_by_distance(population)
    mutated = sort_by_distance(
        evaluate_population(mutate(sorted_candidates, mutation_chance, context), context.groups)
    )

    parents = select_parents(mutated, context)

    next_generation = crossover(parents, context)
    if len(next_generation) < len(population):
        context.log("No offspring created")
        next_generation = mutated

    # Parents can repeat; every slot needs its own candidate
    next_generation = [candidate.copy() for candidate in next_generation]
    return evaluate_population(next_generation, context.groups)


def run_generations(options: GeneticOptions, context: RunContext) -> List[Candidate]:
    """
    Run the generation loop until max_generations or the distance threshold.

    Args:
        options: Solver options
        context: Run context

    Returns:
        Final population sorted by distance
    """
    population = generate_population(options.population_size, context)

    generation = 0
    while generation < options.max_generations:
        context.log(f"\nGeneration {generation + 1} " + "=" * 40)

        population = sort_by_distance(
            advance_generation(
                evaluate_population(population, context.groups),
                options.mutation_chance,
                context
            )
        )

        context.log(f"\tBest Distance: {population[0].distance}")

        if population[0].distance < options.distance_threshold:
            context.log(f"Distance threshold {options.distance_threshold} reached")
            break

        generation += 1

    best = population[0]
    context.log("=" * 70)
    context.log("\tBest Candidate")
    context.log(f"\tTotal Cost: {best.total_cost}")
    context.log(f"\tDistance: {best.distance}")
    context.log(f"\t{[pairing.to_dict() for pairing in best.assignment]}")

    return population


def start(
    data: Any,
    options: Union[GeneticOptions, Dict[str, Any], None] = None,
    row_names: Optional[Sequence[Any]] = None,
    col_names: Optional[Sequence[Any]] = None,
    verbose: bool = False
) -> Union[List[Dict[str, Any]], GeneticError]:
    """
    Solve an assignment problem with the genetic algorithm.

    This is the entry point used by callers of the solver. Errors are
    returned as GeneticError values rather than raised.

    Args:
        data: Agents with answers, or a raw cost matrix
        options: GeneticOptions or a mapping of option keys
        row_names: Agent names (matrix input only)
        col_names: Task names (matrix input only)
        verbose: Print progress while running

    Returns:
        List of result dictionaries sorted by distance, or a GeneticError
    """
    try:
        if options is not None and not isinstance(options, (dict, GeneticOptions)):
            raise InvalidInputError(f"Options must be a mapping, got: {type(options).__name__}")
        options = GeneticOptions.from_dict(options)
        validate_genetic_input(data, row_names, col_names)
        matrix, names_of_rows, names_of_cols, real_agents = prepare_problem(data, row_names, col_names)
        validate_options(options, names_of_cols)
    except (InvalidInputError, TypeError) as e:
        return GeneticError(code=INVALID_INPUT, message=str(e))

    try:
        context = build_run_context(matrix, names_of_cols, options, verbose)
        population = run_generations(options, context)

        if real_agents:
            return get_top_results_with_real_agents(data, population, options.returned_candidates)
        return get_top_results_with_dummy_names(
            matrix, population, options.returned_candidates, names_of_rows, names_of_cols
        )
    except InvalidInputError as e:
        return GeneticError(code=INVALID_INPUT, message=str(e))
    except Exception as e:
        if verbose:
            print(f"Error: {type(e).__name__}: {e}")
        return GeneticError(code=ALGORITHM_FAILURE, message=f"{type(e).__name__}: {e}")
