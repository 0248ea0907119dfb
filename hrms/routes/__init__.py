# hrms/routes/__init__.py
from .reports import reports_bp
from .performance import performance_bp
