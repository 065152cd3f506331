"""Solve a band system stored as four text files.

Reads ``data/input.txt`` (n and k), ``data/AL.txt`` (the sub-diagonal
band), ``data/D.txt`` (the diagonal) and ``data/F.txt`` (the right-hand
side), solves A x = f and writes ``data/X.txt``.

Usage::

    python examples/solve_from_files.py [single|double|mixed|extended]
"""

import os
import sys

from pybandldlt.banded import SingularMatrixError
from pybandldlt.solver import BandLDLTSolver, SolverControl
from pybandldlt.utils import print_matrix, print_vector

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def main(precision: str = "double") -> int:
    control = SolverControl(precision=precision, verbose=2)

    try:
        solver = BandLDLTSolver.from_files(
            os.path.join(DATA_DIR, "input.txt"),
            os.path.join(DATA_DIR, "AL.txt"),
            os.path.join(DATA_DIR, "D.txt"),
            os.path.join(DATA_DIR, "F.txt"),
            control=control,
        )
        print("\n  A =")
        print_matrix(solver.storage)

        result = solver.fit()
    except (FileNotFoundError, ValueError, SingularMatrixError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print_vector(result.x, name="\n  x")
    result.summary()

    out = result.to_file(os.path.join(DATA_DIR, "X.txt"))
    print(f"\n  Solution written to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
