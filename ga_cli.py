#!/usr/bin/env python3
"""
Genetic Assignment CLI - Minimal entry point.

This is the command-line interface for the genetic assignment solver.
All configuration is specified in YAML files.

Usage:
    python3 ga_cli.py run_config.yaml
    python3 ga_cli.py --config run_config.yaml
    python3 ga_cli.py --help

Run configuration:
    input:
      problem: examples/problem.yaml
    options:
      maxGenerations: 20
      populationSize: 10
      mutationChance: 0.3
      distanceThreshold: 1.01
      returnedCandidates: 3
      seed: 42
    output:
      path: results.json
      overwrite: true
    verbose: true
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point for the solver CLI."""
    # Handle help
    if len(sys.argv) < 2 or sys.argv[1] in ['-h', '--help', 'help']:
        print(__doc__)
        sys.exit(0 if len(sys.argv) > 1 else 1)

    # Parse config path
    config_path = sys.argv[1]

    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(sys.argv) < 3:
            print("Error: --config requires an argument")
            print(__doc__)
            sys.exit(1)
        config_path = sys.argv[2]

    # Import and run
    try:
        from genetic_assignment.cli import run_from_config
        from genetic_assignment.orchestration import GeneticError
        results = run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    if isinstance(results, GeneticError):
        sys.exit(1)

    print("\nRun completed successfully!")


if __name__ == '__main__':
    main()
