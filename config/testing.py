from config.config import db_config, policy_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()
POLICY = policy_from_env()

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
