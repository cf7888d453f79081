import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "point-system-secret"

    # BLUEPRINT_DB_* take precedence over DB_*
    DB_USER = os.environ.get("BLUEPRINT_DB_USERNAME", os.environ.get("DB_USER", "root"))
    DB_PASSWORD = os.environ.get("BLUEPRINT_DB_PASSWORD", os.environ.get("DB_PASSWORD", "password"))
    DB_HOST = os.environ.get("BLUEPRINT_DB_HOST", os.environ.get("DB_HOST", "localhost"))
    DB_PORT = int(os.environ.get("BLUEPRINT_DB_PORT", os.environ.get("DB_PORT", "3306")))
    DB_NAME = os.environ.get("BLUEPRINT_DB_DATABASE", os.environ.get("DB_NAME", "point_system_db"))

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))


def db_config() -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
    }


def policy_from_env() -> dict:
    """Attendance/payroll policy numbers; defaults match point_system.core.constants."""
    return {
        "SHIFT_WINDOW_HOURS": float(os.environ.get("SHIFT_WINDOW_HOURS", "12")),
        "STANDARD_WORKDAY_HOURS": float(os.environ.get("STANDARD_WORKDAY_HOURS", "9")),
        "LUNCH_BREAK_HOURS": float(os.environ.get("LUNCH_BREAK_HOURS", "1")),
        "REPORT_TIMEOUT_SECONDS": float(os.environ.get("REPORT_TIMEOUT_SECONDS", "30")),
    }
