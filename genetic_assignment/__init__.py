"""
Genetic Assignment Solver

This package solves constrained weighted bipartite assignment problems
(agents x tasks, each pairing carrying a cost) with a genetic algorithm.
Group constraints cap how many assignments a subset of tasks may receive.

Key Features:
- Seeded runs are fully reproducible
- All run state lives in an explicit RunContext (safe for parallel runs)
- Greedy lowest-cost crossover over pooled parent pairings
- Errors returned as values at the solver boundary

Modules:
- rng: Seeded random source
- data_models: Core data structures (Assignment, Candidate, Group, GeneticOptions, RunContext)
- fitness: Distance scoring
- population: Group derivation and random population generation
- mutation: Full-replacement mutation
- crossover: Pooled greedy crossover
- selection: Inverted roulette-wheel parent selection
- validation: Input and option validation
- orchestration: Generation loop and solver entry point
- results: Named result formatting
- result_stats: Summary statistics for returned assignments
- io_utils: Problem and result file I/O
- cli: Run configuration loading and dispatch
"""

__version__ = "0.1.0"
__author__ = "Assignment Optimization Team"

from .data_models import Assignment, Candidate, Group, GeneticOptions, RunContext
from .orchestration import start, GeneticError, INVALID_INPUT, ALGORITHM_FAILURE
from .rng import SeededRandom
from .validation import InvalidInputError

__all__ = [
    "Assignment",
    "Candidate",
    "Group",
    "GeneticOptions",
    "RunContext",
    "SeededRandom",
    "InvalidInputError",
    "GeneticError",
    "INVALID_INPUT",
    "ALGORITHM_FAILURE",
    "start",
]
