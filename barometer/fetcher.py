# barometer/fetcher.py
"""
Fetch orchestration for the pressure dashboard.

One trigger = one GET against the backend. The response is normalized into
a tuple of NormalizedRecord; anything that goes wrong comes back as a tagged
FetchFailure instead of an exception. recover() then turns either outcome
into something renderable, substituting the built-in sample data on failure.
"""
import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

import requests

from barometer import settings
from barometer.fallback import sample_records
from barometer.normalizers import NormalizedRecord, NormalizerPipeline, get_default_normalizer
from barometer.stats import StatsSummary, summarize

log = logging.getLogger(__name__)

HTTP_ERROR_MSG = "HTTP error! Status: {status}"
PARSE_ERROR_MSG = "Backend returned invalid JSON. Check data format."
EMPTY_ERROR_MSG = "No data returned from backend"
TRANSPORT_ERROR_MSG = "Could not reach backend: {error}"
PIPELINE_ERROR_MSG = "Could not process backend data: {error}"


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(str, Enum):
    TRANSPORT = "transport"      # connection refused, DNS, timeout ...
    HTTP_STATUS = "http_status"  # non-2xx
    PARSE = "parse"              # body is not JSON
    EMPTY = "empty"              # JSON, but no usable records
    PIPELINE = "pipeline"        # records could not be processed


@dataclass(frozen=True)
class FetchFailure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class FetchResult:
    records: Tuple[NormalizedRecord, ...] = ()
    failure: Optional[FetchFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class Dataset:
    records: Tuple[NormalizedRecord, ...]
    stats: StatsSummary
    error: Optional[str] = None


@dataclass(frozen=True)
class DashboardSnapshot:
    """Read-only view handed to the presentation layer."""
    status: FetchStatus
    records: Tuple[NormalizedRecord, ...]
    stats: StatsSummary
    error: Optional[str]
    backend_url: str

    @property
    def loading(self) -> bool:
        return self.status == FetchStatus.LOADING


def _failed(kind: FailureKind, message: str) -> FetchResult:
    log.warning("observation fetch failed (%s): %s", kind.value, message)
    return FetchResult(failure=FetchFailure(kind, message))


def fetch_observations(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    normalizer: Optional[NormalizerPipeline] = None,
) -> FetchResult:
    """
    Issue exactly one GET to `url` and normalize the JSON body.

    Accepts a JSON array of records or a single record object.
    Never raises for transport/HTTP/parse/empty problems; those come back
    as FetchResult.failure.
    """
    normalizer = normalizer or get_default_normalizer()
    timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout

    if session is None:
        with requests.Session() as s:
            return _fetch(s, url, timeout, normalizer)
    return _fetch(session, url, timeout, normalizer)


def _fetch(session, url: str, timeout: float, normalizer: NormalizerPipeline) -> FetchResult:
    try:
        r = session.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    except requests.RequestException as e:
        return _failed(FailureKind.TRANSPORT, TRANSPORT_ERROR_MSG.format(error=e))

    if not 200 <= r.status_code < 300:
        return _failed(FailureKind.HTTP_STATUS, HTTP_ERROR_MSG.format(status=r.status_code))

    try:
        body = r.json()
    except ValueError:
        return _failed(FailureKind.PARSE, PARSE_ERROR_MSG)

    # Older producers answer with a bare object instead of a list
    items = body if isinstance(body, list) else [body]
    records = normalizer.normalize_all(items)
    if not records:
        return _failed(FailureKind.EMPTY, EMPTY_ERROR_MSG)

    log.info("fetched %d observations from %s", len(records), url)
    return FetchResult(records=tuple(records))


def recover(result: FetchResult, normalizer: Optional[NormalizerPipeline] = None) -> Dataset:
    """Turn a FetchResult into a renderable dataset; failures fall back to the sample data."""
    if result.ok:
        return Dataset(records=result.records, stats=summarize(result.records))

    normalizer = normalizer or get_default_normalizer()
    records = tuple(normalizer.normalize_all(sample_records()))
    log.info("using sample data after %s failure", result.failure.kind.value)
    return Dataset(records=records, stats=summarize(records), error=result.failure.message)


class DashboardState:
    """
    Owns the dashboard's observable state (records, stats, error, loading).

    trigger_fetch() is the only way the state changes. A trigger that arrives
    while another one is still running is ignored and just gets the current
    snapshot back.
    """
    def __init__(
        self,
        backend_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        normalizer: Optional[NormalizerPipeline] = None,
    ):
        self._backend_url = backend_url or settings.BACKEND_URL
        if session is None:
            session = requests.Session()
            session.headers.update({"Accept": "application/json"})
        self._session = session
        self._timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self._normalizer = normalizer or get_default_normalizer()
        self._lock = threading.Lock()
        self._snapshot = DashboardSnapshot(
            status=FetchStatus.IDLE,
            records=(),
            stats=StatsSummary.empty(),
            error=None,
            backend_url=self._backend_url,
        )

    @property
    def backend_url(self) -> str:
        return self._backend_url

    def set_backend_url(self, url: str) -> None:
        """Takes effect on the next trigger."""
        url = (url or "").strip()
        if not url:
            raise ValueError("backend url must not be empty")
        self._backend_url = url

    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    def trigger_fetch(self) -> DashboardSnapshot:
        if not self._lock.acquire(blocking=False):
            log.info("fetch already in progress, ignoring trigger")
            return self._snapshot
        try:
            url = self._backend_url
            self._snapshot = replace(self._snapshot, status=FetchStatus.LOADING, error=None, backend_url=url)

            fallback_normalizer = self._normalizer
            try:
                result = fetch_observations(url, session=self._session, timeout=self._timeout, normalizer=self._normalizer)
            except Exception as e:
                log.exception("processing observations from %s failed", url)
                result = FetchResult(failure=FetchFailure(FailureKind.PIPELINE, PIPELINE_ERROR_MSG.format(error=e)))
                # sample data goes through the stock pipeline
                fallback_normalizer = None
            data = recover(result, fallback_normalizer)

            self._snapshot = DashboardSnapshot(
                status=FetchStatus.SUCCESS if result.ok else FetchStatus.FAILURE,
                records=data.records,
                stats=data.stats,
                error=data.error,
                backend_url=url,
            )
            return self._snapshot
        finally:
            self._lock.release()

    def close(self) -> None:
        self._session.close()
