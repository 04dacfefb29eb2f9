import os


def _int_env(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key')
    MAX_CONTENT_LENGTH = _int_env('MAX_CONTENT_LENGTH', 16 * 1024 * 1024)
    MATRIX_PROGRESS_INTERVAL = _int_env('MATRIX_PROGRESS_INTERVAL', 1000000)
    MATRIX_GRAPH_MAX_ENTRIES = _int_env('MATRIX_GRAPH_MAX_ENTRIES', 500)
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    TESTING = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    MATRIX_PROGRESS_INTERVAL = 1


class ProductionConfig(Config):
    DEBUG = False


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
