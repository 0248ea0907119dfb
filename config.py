import os

class Config:
    # HR database
    HR_DB_NAME = os.environ.get("HRMS_DB_NAME", "hrms")
    HR_DB_USER = os.environ.get("HRMS_DB_USER", "app_hrms")
    HR_DB_PASSWORD = os.environ.get("HRMS_DB_PASSWORD", "") # add DB password here
    HR_DB_HOST = os.environ.get("HRMS_DB_HOST", "localhost") #or PostgreSQL host
    HR_DB_PORT = int(os.environ.get("HRMS_DB_PORT", "5432")) # or Your port where Postgres listens

    # Secret key for Flask sessions
    SECRET_KEY = os.environ.get("HRMS_SECRET_KEY", "") # generate your own key

    # log path, empty -> log to stderr
    LOG_LEVEL = os.environ.get("HRMS_LOG_LEVEL", "INFO")
    APP_LOG = os.environ.get("HRMS_APP_LOG", "")

    # backend serving stored leave attachments
    BACKEND_BASE_URL = os.environ.get("HRMS_BACKEND_URL", "http://localhost:8000")
    ATTACHMENT_URL_TEMPLATE = "/api/leave/{leave_id}/attachment"
    ATTACHMENT_TIMEOUT = float(os.environ.get("HRMS_ATTACHMENT_TIMEOUT", "30"))

    # printed in report headers
    COMPANY_NAME = os.environ.get("HRMS_COMPANY_NAME", "HRMS")

    # directory holding DejaVuSans.ttf + DejaVuSans-Bold.ttf, tried before system fonts
    FONT_DIR = os.environ.get("HRMS_FONT_DIR", "")
