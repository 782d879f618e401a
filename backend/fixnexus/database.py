"""
FixNexus Backend: MongoDB Connection Management
=================================================

What:  Owns the process-wide AsyncMongoClient and the two collection stores.
How:   MongoDatabase is created in the application lifespan, pinged once
       (with a tenacity retry) and stored on ``app.state.database``.
       Handlers receive stores through FastAPI dependencies; there is no
       module-level client.
When:  Client created at startup, closed at shutdown; pooled connections are
       shared by all concurrent requests.

Collections (database ``settings.db_name``):
    services        → offered repair/service listings
    bookedServices  → bookings of those services by customers
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import ConfigurationError, ConnectionFailure, PyMongoError
from pymongo.server_api import ServerApi
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from fixnexus.config import settings
from fixnexus.exceptions import DatabaseError
from fixnexus.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

SERVICES_COLLECTION = "services"
BOOKED_SERVICES_COLLECTION = "bookedServices"


class MongoDatabase:
    """
    Holder for the client and the per-collection document stores.

    Example:
        database = MongoDatabase.from_settings()
        await database.connect()
        docs = await database.services.find_many({})
        await database.close()
    """

    def __init__(self, client: Optional[AsyncMongoClient], db_name: str):
        self.client = client
        self.db = None
        self.services: Optional[DocumentStore] = None
        self.booked_services: Optional[DocumentStore] = None
        if client is not None:
            self.db = client[db_name]
            self.services = DocumentStore(self.db[SERVICES_COLLECTION])
            self.booked_services = DocumentStore(self.db[BOOKED_SERVICES_COLLECTION])

    @property
    def configured(self) -> bool:
        return self.client is not None

    @classmethod
    def from_settings(cls) -> "MongoDatabase":
        """
        Build the client from settings.

        A URI the driver rejects (empty credentials, unresolvable SRV host)
        is logged and yields an unconfigured holder: pings fail and store
        dependencies raise DatabaseError, but the application still starts.
        """
        try:
            # Stable API v1, strict
            client = AsyncMongoClient(
                settings.mongo_uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
            )
        except ConfigurationError as e:
            logger.error("Invalid MongoDB configuration: %s", str(e))
            return cls(None, settings.db_name)
        return cls(client, settings.db_name)

    async def ping(self) -> None:
        if self.client is None:
            raise ConnectionFailure("MongoDB client is not configured")
        await self.client.admin.command("ping")

    async def connect(self) -> bool:
        """
        Verify the deployment is reachable.

        Only this startup ping is retried (exponential backoff with jitter).
        Returns False instead of raising so the server can still come up
        and report the outage through /health.
        """
        if self.client is None:
            logger.error("MongoDB client is not configured; skipping startup ping")
            return False

        retrying = AsyncRetrying(
            stop=stop_after_attempt(settings.db_connect_attempts),
            wait=wait_exponential(
                multiplier=settings.db_connect_min_wait, max=settings.db_connect_max_wait
            ) + wait_random(0, 1),
            retry=retry_if_exception_type(PyMongoError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self.ping()
        except PyMongoError as e:
            logger.error("Could not reach MongoDB after %d attempts: %s",
                         settings.db_connect_attempts, str(e))
            return False
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")
        return True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> MongoDatabase:
    return request.app.state.database


def _store(request: Request, store: str) -> DocumentStore:
    database = get_database(request)
    if not database.configured:
        raise DatabaseError(
            message="MongoDB client is not configured",
            context={"collection": store},
        )
    return getattr(database, store)


def get_services_store(request: Request) -> DocumentStore:
    return _store(request, "services")


def get_booked_services_store(request: Request) -> DocumentStore:
    return _store(request, "booked_services")
