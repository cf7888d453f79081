import os

from config.config import Config, db_config, policy_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()
POLICY = policy_from_env()

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
