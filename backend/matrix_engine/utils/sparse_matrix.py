import logging

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 1000000


class DimensionMismatch(ValueError):
    """Raised when operand shapes are incompatible for an operation."""

    def __init__(self, operation, left_shape, right_shape, message=None):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        if message is None:
            message = (
                f"Matrix dimensions do not match for {operation}: "
                f"{left_shape[0]}x{left_shape[1]} and {right_shape[0]}x{right_shape[1]}"
            )
        super().__init__(message)


class ProgressObserver:
    """
    Receives the completion fraction of a long-running multiplication.
    The base implementation ignores every report.
    """

    def report(self, fraction):
        pass


class CallbackProgress(ProgressObserver):
    """Forwards progress reports to a plain function."""

    def __init__(self, callback):
        self.callback = callback

    def report(self, fraction):
        self.callback(fraction)


NULL_PROGRESS = ProgressObserver()


class SparseMatrix:
    """
    Sparse matrix that keeps only its non-zero entries in a dictionary
    keyed by (row, col) tuples. Values are integers.
    """

    def __init__(self, rows, cols):
        """
        Creates an empty sparse matrix with the given dimensions.

        Args:
            rows (int): Number of rows
            cols (int): Number of columns
        """
        for name, value in (('rows', rows), ('cols', cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        self._rows = rows
        self._cols = cols
        self.data = {}  # (row, col) -> non-zero value

    @classmethod
    def from_entries(cls, rows, cols, entries):
        """
        Builds a matrix from pre-parsed (row, col, value) triples.

        Args:
            rows (int): Number of rows
            cols (int): Number of columns
            entries (iterable): (row, col, value) triples, applied in order

        Returns:
            SparseMatrix: New matrix holding the non-zero entries
        """
        matrix = cls(rows, cols)
        for row, col, value in entries:
            matrix.set_element(row, col, value)
        return matrix

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def nnz(self):
        """Number of stored non-zero entries."""
        return len(self.data)

    @property
    def density(self):
        """Percentage of positions holding a non-zero value."""
        total_elements = self._rows * self._cols
        return (self.nnz / total_elements) * 100 if total_elements > 0 else 0

    def get_element(self, row, col):
        """
        Returns the value at (row, col), or 0 when nothing is stored there.
        Coordinates are not bounds-checked.
        """
        return self.data.get((row, col), 0)

    def set_element(self, row, col, value):
        """
        Stores value at (row, col). Storing 0 removes the entry instead.

        Args:
            row (int): Row index (base 0)
            col (int): Column index (base 0)
            value (int): Value to store
        """
        if value != 0:
            self.data[(row, col)] = value
        else:
            self.data.pop((row, col), None)

    def get_non_zero_elements(self):
        """Returns a copy of the (row, col) -> value mapping."""
        return self.data.copy()

    def items(self):
        """Yields (row, col, value) triples in row-major order."""
        for (row, col) in sorted(self.data):
            yield row, col, self.data[(row, col)]

    def _check_same_shape(self, other, operation):
        if self._rows != other.rows or self._cols != other.cols:
            raise DimensionMismatch(operation, self.shape, other.shape)

    def add(self, other):
        """
        Adds another sparse matrix to this one.

        Args:
            other (SparseMatrix): Matrix to add

        Returns:
            SparseMatrix: New matrix with the sum
        """
        self._check_same_shape(other, 'addition')

        result = SparseMatrix(self._rows, self._cols)
        result.data = self.data.copy()

        for (row, col), value in other.data.items():
            result.set_element(row, col, result.get_element(row, col) + value)

        return result

    def subtract(self, other):
        """
        Subtracts another sparse matrix from this one.

        Args:
            other (SparseMatrix): Matrix to subtract

        Returns:
            SparseMatrix: New matrix with the difference
        """
        self._check_same_shape(other, 'subtraction')

        result = SparseMatrix(self._rows, self._cols)
        result.data = self.data.copy()

        for (row, col), value in other.data.items():
            result.set_element(row, col, result.get_element(row, col) - value)

        return result

    def multiply(self, other, progress=NULL_PROGRESS, progress_interval=DEFAULT_PROGRESS_INTERVAL):
        """
        Multiplies this matrix by another sparse matrix.

        Only the entries of ``other`` whose row matches the column of a
        non-zero entry of this matrix are visited, through an index of
        ``other`` keyed by that shared inner dimension.

        Args:
            other (SparseMatrix): Right-hand operand
            progress (ProgressObserver): Receives the fraction of this
                matrix's entries processed, every ``progress_interval``
                multiply-adds
            progress_interval (int): Multiply-adds between two reports

        Returns:
            SparseMatrix: New matrix of shape (self.rows, other.cols)
        """
        if self._cols != other.rows:
            raise DimensionMismatch(
                'multiplication', self.shape, other.shape,
                message=(
                    f"Matrix dimensions are not compatible for multiplication: "
                    f"{self._rows}x{self._cols} has {self._cols} columns but "
                    f"{other.rows}x{other.cols} has {other.rows} rows"
                ),
            )
        if progress_interval < 1:
            raise ValueError("progress_interval must be at least 1")

        result = SparseMatrix(self._rows, other.cols)

        inner_index = {}
        for (row, col), value in other.data.items():
            inner_index.setdefault(row, {})[col] = value

        total = len(self.data)
        operations = 0
        reported = False
        for done, ((row1, col1), value1) in enumerate(self.data.items(), start=1):
            for col2, value2 in inner_index.get(col1, {}).items():
                result.set_element(row1, col2, result.get_element(row1, col2) + value1 * value2)
                operations += 1
                if operations % progress_interval == 0:
                    progress.report(done / total)
                    reported = True

        if reported:
            progress.report(1.0)

        logger.debug("Multiplied %dx%d by %dx%d with %d multiply-adds, %d entries in result",
                     self._rows, self._cols, other.rows, other.cols, operations, result.nnz)
        return result

    def to_canonical_text(self):
        """
        Converts the matrix to its textual form: a rows/cols header and one
        "(row, col, value)" line per non-zero entry.
        """
        lines = [f"rows={self._rows}", f"cols={self._cols}"]
        for row, col, value in self.items():
            lines.append(f"({row}, {col}, {value})")
        return "\n".join(lines).strip()

    def __add__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    __hash__ = None

    def __str__(self):
        return self.to_canonical_text()

    def __repr__(self):
        return f"SparseMatrix({self._rows}x{self._cols}, {self.nnz} non-zero entries)"


def create_sparse_matrix_from_entries(rows, cols, entries):
    """
    Creates a sparse matrix from a list of (row, col, value) triples.

    Args:
        rows (int): Number of rows
        cols (int): Number of columns
        entries (iterable): (row, col, value) triples

    Returns:
        SparseMatrix: New sparse matrix
    """
    return SparseMatrix.from_entries(rows, cols, entries)


def create_identity_matrix(size):
    """
    Creates an identity matrix of the given size.

    Args:
        size (int): Number of rows and columns

    Returns:
        SparseMatrix: Identity matrix
    """
    matrix = SparseMatrix(size, size)
    for i in range(size):
        matrix.set_element(i, i, 1)
    return matrix
