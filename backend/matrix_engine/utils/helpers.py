from datetime import datetime, timezone


def generate_response(success=True, data=None, message=None, error=None, details=None):
    """Generate standardized API response"""
    response = {
        'success': success,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if error:
        response['error'] = error

    if details is not None:
        response['details'] = details

    return response


def allowed_matrix_file(filename):
    """Only plain-text matrix files are accepted for upload"""
    return bool(filename) and filename.lower().endswith('.txt')
