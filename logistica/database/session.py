"""
Logistica Server - Database Session
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Base para models
Base = declarative_base()


def _configurar_sqlite(engine: AsyncEngine):
    """
    SQLite: BEGIN explícito para SAVEPOINT funcionar dentro da transação
    e chaves estrangeiras ligadas como no Postgres.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """Engine + session factory com startup/shutdown explícitos"""

    def __init__(self, url: str, echo: bool = False, pool_pre_ping: bool = True):
        self.url = url
        self.echo = echo
        self.pool_pre_ping = pool_pre_ping
        self.engine: Optional[AsyncEngine] = None
        self.sessionmaker: Optional[async_sessionmaker] = None

    async def connect(self, create_tables: bool = True):
        """Cria o pool de conexões e, opcionalmente, as tabelas"""
        self.engine = create_async_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=self.pool_pre_ping,
        )
        if self.engine.dialect.name == "sqlite":
            _configurar_sqlite(self.engine)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )

        if create_tables:
            # Registra os models no metadata antes do create_all
            from logistica import models  # noqa: F401

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info("Banco de dados inicializado")

    async def disconnect(self):
        """Drena e fecha o pool"""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Conexões com o banco encerradas")
        self.engine = None
        self.sessionmaker = None

    def session(self) -> AsyncSession:
        if self.sessionmaker is None:
            raise RuntimeError("Database.connect() não foi chamado")
        return self.sessionmaker()

    async def ping(self):
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency para injetar sessão do banco"""
    database: Database = request.app.state.db
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def transacao(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Delimita uma unidade de trabalho: commit se tudo der certo,
    rollback em qualquer erro (inclusive regras de negócio) e re-raise.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
