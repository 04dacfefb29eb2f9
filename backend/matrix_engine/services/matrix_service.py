import logging

from matrix_engine.utils.sparse_matrix import (
    DEFAULT_PROGRESS_INTERVAL,
    ProgressObserver,
    SparseMatrix,
)
from matrix_engine.utils.matrix_format import parse_matrix

logger = logging.getLogger(__name__)

SUPPORTED_OPERATIONS = ('add', 'subtract', 'multiply')


class UnknownOperationError(ValueError):
    """Raised when an operation name is not one of SUPPORTED_OPERATIONS"""

    def __init__(self, operation):
        self.operation = operation
        super().__init__(
            f"Invalid operation {operation!r}, expected one of: {', '.join(SUPPORTED_OPERATIONS)}"
        )


class LoggingProgress(ProgressObserver):
    """Reports multiplication progress through a logger"""

    def __init__(self, log=None):
        self.log = log or logger

    def report(self, fraction):
        self.log.info("Multiplication progress: %.2f%%", fraction * 100)


class MatrixService:
    """Service for running arithmetic operations on sparse matrices"""

    def __init__(self, progress_interval=DEFAULT_PROGRESS_INTERVAL):
        self.progress_interval = progress_interval

    @staticmethod
    def normalize_operation(operation):
        """Returns the canonical operation name or raises UnknownOperationError"""
        name = (operation or '').strip().lower()
        if name not in SUPPORTED_OPERATIONS:
            raise UnknownOperationError(operation)
        return name

    def parse(self, text):
        """Parses matrix text"""
        return parse_matrix(text)

    def build(self, rows, cols, entries):
        """Builds a matrix from (row, col, value) triples"""
        return SparseMatrix.from_entries(rows, cols, entries)

    def perform_operation(self, operation, left, right, progress=None):
        """
        Runs the named operation on two matrices.

        Args:
            operation (str): 'add', 'subtract' or 'multiply' (case-insensitive)
            left (SparseMatrix): Left operand
            right (SparseMatrix): Right operand
            progress (ProgressObserver): Observer for multiplication progress,
                defaults to a LoggingProgress

        Returns:
            SparseMatrix: Result of the operation
        """
        name = self.normalize_operation(operation)
        logger.debug("Running %s on %r and %r", name, left, right)

        if name == 'add':
            return left.add(right)
        if name == 'subtract':
            return left.subtract(right)
        return left.multiply(
            right,
            progress=progress or LoggingProgress(),
            progress_interval=self.progress_interval,
        )

    @staticmethod
    def summarize(matrix, include_entries=True):
        """Converts a matrix to a JSON-ready dictionary"""
        summary = {
            'rows': matrix.rows,
            'cols': matrix.cols,
            'nnz': matrix.nnz,
            'density': matrix.density,
        }
        if include_entries:
            summary['entries'] = [[row, col, value] for row, col, value in matrix.items()]
            summary['text'] = matrix.to_canonical_text()
        return summary
