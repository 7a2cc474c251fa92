__version__ = "0.1.0"
__description__ = "jsonapi-utils : JSON:API pagination, record counting and request params for Flask-SQLAlchemy"
