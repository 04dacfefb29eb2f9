"""
Reading and writing the plain-text matrix format::

    rows=<integer>
    cols=<integer>
    (<row>, <col>, <value>)
    ...
"""
import logging
import re

from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+$')


class FormatError(ValueError):
    """Raised when matrix text does not follow the expected format."""

    def __init__(self, message, line_number=None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


def _parse_int(text, what, line_number):
    text = text.strip()
    if not INTEGER_PATTERN.match(text):
        raise FormatError(f"Invalid {what} {text!r}, expected an integer", line_number)
    return int(text)


def _parse_header(line, name, line_number):
    prefix = f"{name}="
    if line is None or not line.startswith(prefix):
        raise FormatError(f"Expected '{prefix}<integer>' header", line_number)
    value = _parse_int(line[len(prefix):], name, line_number)
    if value < 0:
        raise FormatError(f"{name} must be non-negative, got {value}", line_number)
    return value


def parse_element(line, line_number=None):
    """
    Parses one "(row, col, value)" element line.

    Returns:
        tuple: (row, col, value)
    """
    if not (line.startswith('(') and line.endswith(')')):
        raise FormatError(f"Invalid element format {line!r}", line_number)

    parts = line[1:-1].split(',')
    if len(parts) != 3:
        raise FormatError(f"Expected 3 fields in element, got {len(parts)}", line_number)

    row = _parse_int(parts[0], 'row', line_number)
    col = _parse_int(parts[1], 'col', line_number)
    value = _parse_int(parts[2], 'value', line_number)
    if row < 0 or col < 0:
        raise FormatError(f"Negative coordinate ({row}, {col})", line_number)
    return row, col, value


def parse_matrix(text):
    """
    Parses matrix text into a SparseMatrix.

    Args:
        text (str): Matrix definition

    Returns:
        SparseMatrix: Parsed matrix

    Raises:
        FormatError: On a missing or malformed header or element line
    """
    lines = [line.strip() for line in text.lstrip('\ufeff').splitlines()]

    rows = _parse_header(lines[0] if len(lines) > 0 else None, 'rows', 1)
    cols = _parse_header(lines[1] if len(lines) > 1 else None, 'cols', 2)

    matrix = SparseMatrix(rows, cols)
    for line_number, line in enumerate(lines[2:], start=3):
        if not line:
            continue
        row, col, value = parse_element(line, line_number)
        matrix.set_element(row, col, value)
    return matrix


def dump_matrix(matrix):
    """Returns the canonical text of a matrix."""
    return matrix.to_canonical_text()


def load_matrix(path):
    """
    Loads a matrix from a text file.

    Args:
        path (str): File path

    Returns:
        SparseMatrix: Loaded matrix

    Raises:
        FormatError: When the file is not UTF-8 text or not a valid matrix
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise FormatError(f"{path} is not UTF-8 text: {e}") from e
    matrix = parse_matrix(text)
    logger.debug("Loaded %s: %dx%d with %d entries", path, matrix.rows, matrix.cols, matrix.nnz)
    return matrix


def save_matrix(matrix, path):
    """Writes a matrix to a text file in canonical form."""
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_matrix(matrix))
        f.write('\n')
    logger.debug("Saved %dx%d matrix with %d entries to %s", matrix.rows, matrix.cols, matrix.nnz, path)
