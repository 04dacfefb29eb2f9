import graphviz

DEFAULT_MAX_ENTRIES = 500


class GraphTooLargeError(ValueError):
    """Raised when a matrix has more entries than can be rendered."""


def render_matrix_graph(matrix, max_entries=DEFAULT_MAX_ENTRIES):
    """
    Renders the non-zero entries of a matrix as a node-based grid.

    Row nodes (orange) and column nodes (green) hang off a header node; every
    non-zero entry becomes a white node linked to its row and its column.

    Args:
        matrix (SparseMatrix): Matrix to render
        max_entries (int): Largest number of entries that will be drawn

    Returns:
        graphviz.Digraph: Graph ready to be piped to SVG or read as DOT source
    """
    if matrix.nnz > max_entries:
        raise GraphTooLargeError(
            f"Matrix has {matrix.nnz} non-zero entries, more than the {max_entries} that can be rendered"
        )

    dot = graphviz.Digraph(name='sparse_matrix', format='svg')
    dot.attr(rankdir='LR', nodesep='0.7', ranksep='0.7', splines='ortho')
    dot.attr('node', shape='box', style='filled', fontname='Arial')

    dot.node('header', f'MATRIX {matrix.rows}x{matrix.cols}', fillcolor='#f9f9b6', width='2.2', height='0.7')

    entries = list(matrix.items())
    rows = sorted({row for row, _, _ in entries})
    cols = sorted({col for _, col, _ in entries})

    for col in cols:
        dot.node(f'col_{col}', f'col {col}', fillcolor='#b6f9b6', width='1.2', height='0.7')
        dot.edge('header', f'col_{col}')

    for row in rows:
        dot.node(f'row_{row}', f'row {row}', fillcolor='#ff9966', width='1.5', height='0.7')
        dot.edge('header', f'row_{row}')

    if cols:
        dot.body.append('{rank=same; ' + ' '.join(['header'] + [f'col_{col}' for col in cols]) + ';}')

    for row, col, value in entries:
        node_id = f'e_{row}_{col}'
        dot.node(node_id, str(value), fillcolor='white', width='1', height='0.7')
        dot.edge(f'row_{row}', node_id)
        dot.edge(f'col_{col}', node_id)

    return dot
