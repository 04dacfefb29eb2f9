"""
Command line entry point: loads two matrix files, runs the chosen operation
and writes the result file.
"""
import argparse
import logging
import sys

from matrix_engine.services.matrix_service import (
    MatrixService,
    SUPPORTED_OPERATIONS,
    UnknownOperationError,
)
from matrix_engine.utils.matrix_format import FormatError, load_matrix, save_matrix
from matrix_engine.utils.sparse_matrix import CallbackProgress, DimensionMismatch

PROMPT = 'Select operation (add/subtract/multiply): '


def build_parser():
    parser = argparse.ArgumentParser(
        prog='matrix-engine',
        description='Add, subtract or multiply two sparse matrix files.'
    )
    parser.add_argument('left', help='first matrix file')
    parser.add_argument('right', help='second matrix file')
    parser.add_argument('-o', '--operation', choices=SUPPORTED_OPERATIONS,
                        help='operation to run; prompted for when omitted')
    parser.add_argument('--output', default='results.txt', help='result file (default: results.txt)')
    parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')
    return parser


def prompt_operation(input_func=input):
    """Asks for an operation until a supported one is typed"""
    while True:
        try:
            return MatrixService.normalize_operation(input_func(PROMPT))
        except UnknownOperationError:
            print('Invalid operation')


def print_progress(fraction):
    print(f'Multiplication progress: {fraction * 100:.2f}%')


def main(argv=None, input_func=input):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        left = load_matrix(args.left)
        right = load_matrix(args.right)
    except (OSError, FormatError) as e:
        print(f'Error loading matrices: {e}', file=sys.stderr)
        return 1

    try:
        operation = args.operation or prompt_operation(input_func)
    except EOFError:
        print('No operation selected', file=sys.stderr)
        return 1

    try:
        result = MatrixService().perform_operation(
            operation, left, right, progress=CallbackProgress(print_progress)
        )
    except DimensionMismatch as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    try:
        save_matrix(result, args.output)
    except OSError as e:
        print(f'Error writing {args.output}: {e}', file=sys.stderr)
        return 1

    print(f'Results have been saved to {args.output}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
