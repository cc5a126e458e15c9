from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from pagecms.domain.exceptions import CMSError


def register_error_handlers(app):
    @app.errorhandler(CMSError)
    def handle_cms_error(error):
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = error.status_code
        return response

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(error):
        current_app.logger.exception("Storage error")
        response = jsonify({
            "error": "StorageError",
            "message": "The request could not be completed"
        })
        response.status_code = 500
        return response
