# migrations/env.py
import os
from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

import certportal.models  # noqa: F401  registra as tabelas
from certportal.db.base import Base
from certportal.db.session import normalize_database_url

# (1) carregar .env
load_dotenv()

config = context.config

# (2) URL: a que o bootstrap passou, senão DATABASE_URL, senão sqlite local
db_url = config.get_main_option("sqlalchemy.url") or os.getenv("DATABASE_URL")
if not db_url or db_url.strip() == "":
    db_url = "sqlite:///./data/certificados.db"  # fallback
db_url = normalize_database_url(db_url)

# (3) Alembic usará esta URL
config.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))

target_metadata = Base.metadata

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
