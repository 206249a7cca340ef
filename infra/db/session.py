# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Database session management.

Engine and session factory are created on first use, so the module can be
imported when DATABASE_URL is unset (dev profile with in-memory
repositories).
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import db_config

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Create and cache the SQLAlchemy engine.

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    global _engine
    if _engine is None:
        db_config.validate()
        options = {"echo": db_config.echo, "pool_pre_ping": True}
        if not db_config.is_sqlite:
            options.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_recycle=db_config.pool_recycle,
            )
        _engine = create_engine(db_config.database_url, **options)
    return _engine


def _get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=get_engine(),
        )
    return _session_factory


def SessionLocal() -> Session:  # pylint: disable=invalid-name
    """Create a new database session.

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    return _get_session_factory()()


def dispose_engine() -> None:
    """Close pooled connections and forget the cached engine."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Session scope that commits on success and rolls back on error.

    Usage:
        with get_db_session() as session:
            session.add(obj)
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

