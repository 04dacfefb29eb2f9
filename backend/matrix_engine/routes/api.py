from flask import Blueprint, request, jsonify, Response, current_app
from marshmallow import ValidationError

from matrix_engine.schemas import matrix_schema, operation_request_schema, parse_request_schema
from matrix_engine.services.matrix_service import (
    LoggingProgress,
    MatrixService,
    SUPPORTED_OPERATIONS,
    UnknownOperationError,
)
from matrix_engine.utils.helpers import allowed_matrix_file, generate_response
from matrix_engine.utils.matrix_format import FormatError, parse_matrix
from matrix_engine.utils.matrix_graph import GraphTooLargeError, render_matrix_graph
from matrix_engine.utils.sparse_matrix import DimensionMismatch

api_bp = Blueprint('api', __name__)


def get_matrix_service():
    return MatrixService(progress_interval=current_app.config['MATRIX_PROGRESS_INTERVAL'])


def error_response(error, status, details=None):
    return jsonify(generate_response(success=False, error=error, details=details)), status


@api_bp.route('/operations', methods=['GET'])
def list_operations():
    """List the supported matrix operations"""
    return jsonify(generate_response(data=list(SUPPORTED_OPERATIONS))), 200


@api_bp.route('/matrices/parse', methods=['POST'])
def parse_matrix_text():
    """Validate matrix text and return its summary"""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided', 400)

    try:
        payload = parse_request_schema.load(data)
        matrix = parse_matrix(payload['text'])
        return jsonify(generate_response(
            data=MatrixService.summarize(matrix),
            message='Matrix parsed successfully'
        )), 200
    except ValidationError as e:
        return error_response('Validation error', 400, details=e.messages)
    except FormatError as e:
        return error_response(str(e), 400)


@api_bp.route('/operations/<operation>', methods=['POST'])
def run_operation(operation):
    """Run add, subtract or multiply on two matrices sent as JSON"""
    service = get_matrix_service()
    try:
        operation = service.normalize_operation(operation)
    except UnknownOperationError as e:
        return error_response(str(e), 404)

    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided', 400)

    try:
        operands = operation_request_schema.load(data)
        result = service.perform_operation(
            operation, operands['left'], operands['right'],
            progress=LoggingProgress(current_app.logger)
        )
        current_app.logger.debug("%s produced %r", operation, result)
        return jsonify(generate_response(
            data=MatrixService.summarize(result),
            message=f'{operation} completed successfully'
        )), 200
    except ValidationError as e:
        return error_response('Validation error', 400, details=e.messages)
    except FormatError as e:
        return error_response(str(e), 400)
    except DimensionMismatch as e:
        return error_response(str(e), 422)
    except Exception as e:
        current_app.logger.exception("Unexpected error running %s", operation)
        return error_response(f'Error running {operation}: {str(e)}', 500)


@api_bp.route('/operations/<operation>/upload', methods=['POST'])
def upload_operation(operation):
    """Run an operation on two uploaded matrix files and return the result file"""
    service = get_matrix_service()
    try:
        operation = service.normalize_operation(operation)
    except UnknownOperationError as e:
        return error_response(str(e), 404)

    for field in ('left', 'right'):
        if field not in request.files:
            return error_response(f"No '{field}' file provided", 400)
        if request.files[field].filename == '':
            return error_response(f"No '{field}' file selected", 400)
        if not allowed_matrix_file(request.files[field].filename):
            return error_response('Only .txt matrix files are allowed', 400)

    try:
        left = parse_matrix(request.files['left'].read().decode('utf-8'))
        right = parse_matrix(request.files['right'].read().decode('utf-8'))
        result = service.perform_operation(
            operation, left, right,
            progress=LoggingProgress(current_app.logger)
        )
        return Response(
            result.to_canonical_text() + '\n',
            mimetype='text/plain',
            headers={'Content-Disposition': f'attachment; filename={operation}_result.txt'}
        )
    except UnicodeDecodeError:
        return error_response('Matrix files must be UTF-8 text', 400)
    except FormatError as e:
        return error_response(str(e), 400)
    except DimensionMismatch as e:
        return error_response(str(e), 422)
    except Exception as e:
        current_app.logger.exception("Unexpected error running %s on uploaded files", operation)
        return error_response(f'Error running {operation}: {str(e)}', 500)


@api_bp.route('/matrices/graph', methods=['POST'])
def matrix_graph():
    """Return the Graphviz DOT source of a matrix"""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided', 400)

    try:
        matrix = matrix_schema.load(data)
        dot = render_matrix_graph(matrix, max_entries=current_app.config['MATRIX_GRAPH_MAX_ENTRIES'])
        return jsonify(generate_response(data={'dot': dot.source})), 200
    except ValidationError as e:
        return error_response('Validation error', 400, details=e.messages)
    except FormatError as e:
        return error_response(str(e), 400)
    except GraphTooLargeError as e:
        return error_response(str(e), 413)
