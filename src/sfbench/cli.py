"""
Command-line entry point: time every requested function on every backend.

Usage:
    sfbench                         # every known function
    sfbench sin cos bessel_Y0       # only these (unknown names are ignored)
    sfbench --seed 42 erf
    sfbench --list
    sfbench --list-backends

Examples:
    python -m sfbench sin
    SFBENCH_AMDLIBM=/opt/aocl/lib/libalm.so sfbench exp log
"""

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from .backend import build_backends, check_backends, function_union, prepare_backends, requested_functions
from .profiling import RUN_SETS, print_prepare_report, reset_profile, run_all
from .profiling.runner import BOLD, DIM, RESET


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfbench",
        description="Compare evaluation throughput of special-function implementations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output columns:
    label  Mevals/s  mean of outputs  [domain lower, domain upper]

Examples:
    sfbench sin cos
    sfbench --seed 7 bessel_Y0 hank103
        """
    )
    parser.add_argument("functions", nargs="*", metavar="FUNCTION",
                        help="Functions to benchmark (default: all known functions)")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the shared input sample (default: 0)")
    parser.add_argument("--list", action="store_true", help="Print known function names and exit")
    parser.add_argument("--list-backends", action="store_true", help="Print backend availability and exit")
    return parser


def print_backend_availability(stream=None):
    stream = stream if stream is not None else sys.stdout
    for family, available in check_backends().items():
        print(f"{family:<10}{'yes' if available else 'no'}", file=stream)


def main(argv: Optional[Sequence[str]] = None, run_sets: Optional[List[Tuple[int, int]]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_backends:
        print_backend_availability()
        return 0

    backends = build_backends()

    if args.list:
        for name in sorted(function_union(backends)):
            print(name)
        return 0

    names = requested_functions(backends, args.functions)
    print(f"{BOLD}{len(names)} function{'s' if len(names) != 1 else ''} on {len(backends)} backends{RESET}",
          file=sys.stderr)
    print(f"{DIM}{', '.join(b.name for b in backends)}{RESET}", file=sys.stderr)

    reset_profile()
    prepare_backends(backends, names)
    print_prepare_report(sys.stderr)

    run_all(backends, names, RUN_SETS if run_sets is None else run_sets, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
