# hrms/__init__.py
from flask import Flask
from config import Config
from hrms.logger import logger  # unified logger


def create_app(source=None, attachment_transport=None, evaluation_period=None):
    from hrms.datasource import PostgresHrSource
    from hrms.reports.aggregators import EvaluationPeriodStore
    from hrms.reports.registry import validate_registry
    from hrms.reports.service import init_report_handlers

    app = Flask(__name__)
    app.secret_key = Config.SECRET_KEY  # for Flask sessions

    # per-app handler table, checked against the registry at startup
    handlers = init_report_handlers(attachment_transport, handlers={})
    validate_registry(handlers=handlers)

    app.extensions["hrms.report_handlers"] = handlers
    app.extensions["hrms.source"] = source or PostgresHrSource()
    app.extensions["hrms.evaluation_period"] = evaluation_period or EvaluationPeriodStore()

    # Blueprints registration
    from hrms.routes import reports_bp, performance_bp
    app.register_blueprint(reports_bp)
    app.register_blueprint(performance_bp)

    logger.info("HRMS report engine initialized")
    return app
