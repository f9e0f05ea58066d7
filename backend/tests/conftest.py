import os

# app.db.session builds its engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")
