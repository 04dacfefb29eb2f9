import pytest
from matrix_engine.utils.matrix_format import (
    FormatError,
    dump_matrix,
    load_matrix,
    parse_element,
    parse_matrix,
    save_matrix,
)
from matrix_engine.utils.sparse_matrix import create_sparse_matrix_from_entries

@pytest.fixture
def sample_text():
    """Matrix text with irregular spacing and a blank line"""
    return (
        "rows=8433\n"
        "cols=3180\n"
        "(0, 381, -694)\n"
        "\n"
        "(0,128,-838)\n"
        "  (5, 2, 7)  \n"
    )

def test_parse_matrix(sample_text):
    """Test header and element lines are parsed"""
    matrix = parse_matrix(sample_text)

    assert matrix.shape == (8433, 3180)
    assert matrix.get_non_zero_elements() == {(0, 381): -694, (0, 128): -838, (5, 2): 7}

def test_parse_windows_line_endings():
    """Test CRLF files are accepted"""
    matrix = parse_matrix("rows=2\r\ncols=2\r\n(1, 1, 3)\r\n")

    assert matrix.get_element(1, 1) == 3

def test_parse_zero_value_is_not_stored():
    """Test zero-valued lines leave no entry"""
    matrix = parse_matrix("rows=2\ncols=2\n(0, 0, 0)")

    assert matrix.nnz == 0

def test_parse_header_only():
    """Test a file without element lines is an empty matrix"""
    matrix = parse_matrix("rows=3\ncols=4")

    assert matrix.shape == (3, 4)
    assert matrix.nnz == 0

@pytest.mark.parametrize('text', [
    "",
    "rows=2",
    "cols=2\nrows=2",
    "rows=two\ncols=2",
    "rows=2\ncols=-1",
    "\nrows=2\ncols=2",
    "rows=2.5\ncols=2",
])
def test_invalid_header(text):
    """Test malformed or missing headers are rejected"""
    with pytest.raises(FormatError):
        parse_matrix(text)

@pytest.mark.parametrize('line', [
    "0, 1, 2",
    "(0, 1)",
    "(0, 1, 2, 3)",
    "(0, 1, 2.5)",
    "(a, 1, 2)",
    "(0, , 2)",
    "[0, 1, 2]",
    "(-1, 0, 2)",
    "(1_0, 0, 2)",
    "(0, 0, \uff15)",
    "(\u0663, 0, 2)",
])
def test_invalid_element_line(line):
    """Test element lines with the wrong shape or non-integer fields are rejected"""
    with pytest.raises(FormatError) as excinfo:
        parse_matrix(f"rows=5\ncols=5\n{line}")

    assert excinfo.value.line_number == 3
    assert str(excinfo.value).startswith("Line 3:")

def test_parse_element_accepts_signs():
    """Test explicit signs are allowed on values"""
    assert parse_element("(1, 2, +5)") == (1, 2, 5)
    assert parse_element("( 3 ,4, -6 )") == (3, 4, -6)

def test_format_error_is_value_error():
    """Test FormatError can be handled as a ValueError"""
    with pytest.raises(ValueError):
        parse_matrix("bad")

def test_round_trip():
    """Test dumping and parsing again gives an equal matrix"""
    matrix = create_sparse_matrix_from_entries(4, 6, [(3, 5, -2), (0, 0, 9), (2, 1, 1)])

    assert parse_matrix(dump_matrix(matrix)) == matrix

def test_file_round_trip(tmp_path):
    """Test saving and loading a matrix file"""
    matrix = create_sparse_matrix_from_entries(3, 3, [(0, 2, 4), (1, 0, -1)])
    path = tmp_path / 'matrix.txt'

    save_matrix(matrix, str(path))
    loaded = load_matrix(str(path))

    assert loaded == matrix
    assert path.read_text(encoding='utf-8') == "rows=3\ncols=3\n(0, 2, 4)\n(1, 0, -1)\n"

def test_load_missing_file(tmp_path):
    """Test loading a missing file raises OSError"""
    with pytest.raises(OSError):
        load_matrix(str(tmp_path / 'missing.txt'))

def test_header_with_non_ascii_digits():
    """Test only ASCII digits are accepted in the header"""
    with pytest.raises(FormatError):
        parse_matrix("rows=\u0663\ncols=2")

def test_load_file_not_utf8(tmp_path):
    """Test a file that is not UTF-8 raises FormatError"""
    path = tmp_path / 'matrix.txt'
    path.write_bytes(b"rows=1\ncols=1\n(0, 0, \xff)\n")

    with pytest.raises(FormatError):
        load_matrix(str(path))
