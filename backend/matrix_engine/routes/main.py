from flask import Blueprint, jsonify

from matrix_engine import __version__

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    """Root endpoint"""
    return jsonify({
        'message': 'Sparse Matrix Engine',
        'version': __version__,
        'status': 'running'
    })

@main_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'message': 'API is running successfully'
    })

@main_bp.route('/api-info')
def api_info():
    """API information endpoint"""
    return jsonify({
        'name': 'Sparse Matrix Engine',
        'version': __version__,
        'description': 'Addition, subtraction and multiplication of sparse integer matrices',
        'endpoints': {
            'main': '/',
            'health': '/health',
            'api_info': '/api-info',
            'operations': '/api/v1/operations',
            'run_operation': '/api/v1/operations/<operation>',
            'upload_operation': '/api/v1/operations/<operation>/upload',
            'parse_matrix': '/api/v1/matrices/parse',
            'matrix_graph': '/api/v1/matrices/graph'
        }
    })
