from config import Config
import psycopg2


def get_hr_connection():
    return psycopg2.connect(
        dbname=Config.HR_DB_NAME,
        user=Config.HR_DB_USER,
        password=Config.HR_DB_PASSWORD,
        host=Config.HR_DB_HOST,
        port=Config.HR_DB_PORT
    )
