from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

from matrix_engine.utils.sparse_matrix import (
    CallbackProgress,
    DimensionMismatch,
    NULL_PROGRESS,
    ProgressObserver,
    SparseMatrix,
    create_identity_matrix,
    create_sparse_matrix_from_entries,
)
from matrix_engine.utils.matrix_format import (
    FormatError,
    dump_matrix,
    load_matrix,
    parse_matrix,
    save_matrix,
)

__version__ = '1.0.0'

# Load environment variables
load_dotenv()


def create_app(config_name='development'):
    """Application factory pattern"""
    from matrix_engine.config import config_by_name

    app = Flask(__name__)

    # Configuration
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Enable CORS
    CORS(app)

    # Register blueprints
    from matrix_engine.routes.main import main_bp
    from matrix_engine.routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api/v1')

    return app


__all__ = [
    'CallbackProgress',
    'DimensionMismatch',
    'FormatError',
    'NULL_PROGRESS',
    'ProgressObserver',
    'SparseMatrix',
    'create_app',
    'create_identity_matrix',
    'create_sparse_matrix_from_entries',
    'dump_matrix',
    'load_matrix',
    'parse_matrix',
    'save_matrix',
]
