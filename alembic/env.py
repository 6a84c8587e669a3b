"""Alembic environment for the document table.

The URL comes from liftium settings (sync driver), so ``DATABASE_URL_OVERRIDE``
pointing at SQLite works for local runs as well as PostgreSQL.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from liftium.core.config import get_settings
from liftium.db.base import Base
from liftium.models import StoredDocument  # noqa: F401 - registers the documents table

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()
config.set_main_option("sqlalchemy.url", settings.database_url)

target_metadata = Base.metadata


def _skip_empty_revisions(context, revision, directives):
    # autogenerate with no model changes should not write a blank file
    if getattr(config.cmd_opts, "autogenerate", False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []


def _options_for(dialect_name: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite cannot ALTER most constraints in place
        "render_as_batch": dialect_name == "sqlite",
        "process_revision_directives": _skip_empty_revisions,
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options_for(url.split(":", 1)[0].split("+", 1)[0]),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        with connectable.connect() as connection:
            context.configure(connection=connection, **_options_for(connection.dialect.name))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
