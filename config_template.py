# This is a template config. Please edit 'XXX' values for your deployment.

import os

class Config:
    # HR database
    HR_DB_NAME = "hrms"
    HR_DB_USER = "app_hrms"
    HR_DB_PASSWORD = "XXX"
    HR_DB_HOST = "localhost"
    HR_DB_PORT = 5432

    # Secret key for Flask sessions
    SECRET_KEY = "XXX"

    # Single log file for whole app ("" -> stderr)
    LOG_LEVEL = "INFO"
    APP_LOG = "XXX"  # e.g. "/var/www/hrms/log/app_hrms.log"

    # Backend serving stored leave attachments
    BACKEND_BASE_URL = "XXX"  # e.g. "https://hr.example.com"
    ATTACHMENT_URL_TEMPLATE = "/api/leave/{leave_id}/attachment"
    ATTACHMENT_TIMEOUT = 30.0

    # Company name printed in report headers
    COMPANY_NAME = "XXX"

    # directory holding DejaVuSans.ttf + DejaVuSans-Bold.ttf (optional)
    FONT_DIR = ""
