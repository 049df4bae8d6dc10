from databases import Database

from tcgleague.config import config

database = Database(config.pg_dsn)
