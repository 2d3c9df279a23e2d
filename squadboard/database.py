from databases import Database

from squadboard.config import config

database = Database(str(config.pg_dsn))
