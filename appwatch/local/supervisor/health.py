import enum
import logging
import requests
from dataclasses import dataclass
from typing import Optional

from appwatch.settings import HEALTH_CHECK_TIMEOUT

log = logging.getLogger(__name__)


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    TRANSPORT_FAILURE = "transport_failure"
    BAD_STATUS = "bad_status"


@dataclass(frozen=True)
class HealthCheckOutcome:
    """The classified result of a single probe."""
    kind: OutcomeKind
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, status_code: int) -> "HealthCheckOutcome":
        return cls(OutcomeKind.SUCCESS, status_code=status_code)

    @classmethod
    def transport_failure(cls, error: str) -> "HealthCheckOutcome":
        return cls(OutcomeKind.TRANSPORT_FAILURE, error=error)

    @classmethod
    def bad_status(cls, status_code: int) -> "HealthCheckOutcome":
        return cls(OutcomeKind.BAD_STATUS, status_code=status_code)

    def __str__(self) -> str:
        if self.kind is OutcomeKind.TRANSPORT_FAILURE:
            return f"transport failure ({self.error})"
        if self.kind is OutcomeKind.BAD_STATUS:
            return f"bad status {self.status_code}"
        return "OK"


class HealthChecker:
    """
    Performs single HTTP liveness probes against the managed application.
    Retries are not done here; the supervisor's failure counter handles them.
    """

    def __init__(self, timeout: float = HEALTH_CHECK_TIMEOUT) -> None:
        self.timeout = timeout

    def probe(self, url: str) -> HealthCheckOutcome:
        """
        Issues one GET request and classifies the result.

        :param url: The health-check URL.
        :return: SUCCESS for a 2xx status, BAD_STATUS for any other status,
                 TRANSPORT_FAILURE when no response was received.
        """
        try:
            # The context manager releases the connection whatever the status.
            with requests.get(url, timeout=self.timeout) as response:
                status_code = response.status_code
        except (requests.exceptions.RequestException, ValueError) as e:
            # urllib3 URL parsing errors (e.g. LocationParseError) escape requests as ValueErrors.
            return HealthCheckOutcome.transport_failure(str(e))

        if 200 <= status_code < 300:
            return HealthCheckOutcome.success(status_code)
        return HealthCheckOutcome.bad_status(status_code)
