"""Resource store — the in-memory record list behind one dashboard screen."""

import logging
from collections.abc import Callable

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.error_messages import describe_error
from admin_dashboard.application.services.response_normalizer import (
    normalize_collection,
    unwrap_record,
)
from admin_dashboard.domain.entities import CancellationToken, Record, is_cancelled, record_id, same_id
from admin_dashboard.domain.exceptions import (
    ApiError,
    ApiHttpError,
    EntityNotFoundError,
    OperationCancelledError,
)

logger = logging.getLogger(__name__)


class ResourceStore:
    """Full-collection cache for one entity type.

    ``refresh()`` replaces the whole list. Backend failures never escape:
    they become ``error`` (the screen's banner text) and an empty list.
    Results of a cancelled refresh are discarded.
    """

    def __init__(
        self,
        api: MarketplaceApi,
        *,
        path: str,
        plural: str,
        entity: str,
        transform: Callable[[Record], Record] | None = None,
    ):
        self._api = api
        self._path = path
        self._transform = transform
        self.plural = plural
        self.entity = entity
        self.records: list[Record] = []
        self.loading = False
        self.error: str | None = None

    async def refresh(self, cancel: CancellationToken | None = None) -> list[Record]:
        self.loading = True
        self.error = None
        try:
            payload = await self._api.get(self._path, cancel=cancel)
            records = normalize_collection(payload, self.plural).records_or_raise()
            if is_cancelled(cancel):
                logger.debug("Discarding cancelled %s refresh", self.plural)
                return self.records
            if self._transform is not None:
                records = [self._transform(r) for r in records]
            self.records = records
            logger.info("Fetched %d %s", len(records), self.plural)
        except OperationCancelledError:
            logger.debug("%s refresh cancelled", self.plural)
        except ApiError as exc:
            self.error = describe_error(exc, f"Failed to fetch {self.plural}")
            self.records = []
        finally:
            self.loading = False
        return self.records

    def find(self, key: object) -> Record | None:
        for record in self.records:
            if same_id(record_id(record, self.entity), key):
                return record
        return None

    async def ensure(self, key: object, cancel: CancellationToken | None = None) -> Record:
        """Cached record for ``key``, refetching the collection once if it is missing."""
        record = self.find(key)
        if record is None:
            await self.refresh(cancel=cancel)
            record = self.find(key)
        if record is None:
            raise EntityNotFoundError(self.entity.capitalize(), str(key))
        return record

    def replace(self, key: object, record: Record) -> None:
        for index, existing in enumerate(self.records):
            if same_id(record_id(existing, self.entity), key):
                self.records[index] = record
                return
        self.records.append(record)

    def dismiss_error(self) -> None:
        self.error = None


async def fetch_record(
    api: MarketplaceApi,
    path: str,
    *,
    label: str,
    record_key: object,
    singular: str | None = None,
    cancel: CancellationToken | None = None,
) -> Record:
    """GET one detail object; a 404 or an empty body becomes ``EntityNotFoundError``."""
    try:
        payload = await api.get(path, cancel=cancel)
    except ApiHttpError as exc:
        if exc.is_not_found:
            raise EntityNotFoundError(label, str(record_key)) from exc
        raise
    record = unwrap_record(payload, singular)
    if record is None:
        raise EntityNotFoundError(label, str(record_key))
    return record
