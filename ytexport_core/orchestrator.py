"""
One extraction run: reveal, load, truncate, extract, serialize, save.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ytexport_core.config import LOG_PREFIX, ExtractionSettings
from ytexport_core.csv_export import CsvPayload, save_payload, serialize
from ytexport_core.errors import ContainerNotFoundError, ExtractionCancelled
from ytexport_core.extractor import CommentRecord, extract_records
from ytexport_core.loader import StabilizingLoader

INFO = "info"
ERROR = "error"


class OutcomeStatus(Enum):
    SUCCESS = "success"
    CONTAINER_MISSING = "container_missing"
    NO_RECORDS = "no_records"
    CANCELLED = "cancelled"
    SAVE_FAILED = "save_failed"
    DELIVERY_FAILED = "delivery_failed"


@dataclass
class Outcome:
    status: OutcomeStatus
    message: str
    severity: str = INFO
    record_count: int = 0
    path: Optional[str] = None
    records: Tuple[CommentRecord, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @classmethod
    def delivery_failure(cls, error) -> "Outcome":
        return cls(
            OutcomeStatus.DELIVERY_FAILED,
            f"{LOG_PREFIX} Could not start extraction on the page: {error}",
            ERROR,
        )


class ExtractionOrchestrator:
    def __init__(
        self,
        document,
        sink: Optional[Callable[[CsvPayload], str]] = None,
        settings: Optional[ExtractionSettings] = None,
        delay: Optional[Callable[[int], None]] = None,
        log_callback: Optional[Callable[[str], None]] = None,
        notify_callback: Optional[Callable[[Outcome], None]] = None,
    ):
        self.document = document
        self.settings = (settings or ExtractionSettings()).validate()
        self.sink = sink or (lambda payload: save_payload(payload, self.settings.output_dir))
        self.log_callback = log_callback
        self.notify_callback = notify_callback
        self.loader = StabilizingLoader(
            document,
            delay=delay,
            log_callback=log_callback,
            settle_delay_ms=self.settings.settle_delay_ms,
        )

    def _log(self, msg: str) -> None:
        if self.log_callback:
            self.log_callback(msg)

    def _report(self, outcome: Outcome) -> Outcome:
        self._log(outcome.message)
        if self.notify_callback:
            self.notify_callback(outcome)
        return outcome

    def run(self, target_count: int) -> Outcome:
        self._log(f"{LOG_PREFIX} Starting... Aiming for {target_count} comments.")

        try:
            self.loader.reveal()
            threads = self.loader.load(
                target_count,
                scroll_delay_ms=self.settings.scroll_delay_ms,
                stable_scroll_limit=self.settings.stable_scroll_limit,
            )
        except ContainerNotFoundError as e:
            return self._report(Outcome(
                OutcomeStatus.CONTAINER_MISSING,
                f"{LOG_PREFIX} {e} Aborting.",
                ERROR,
            ))
        except ExtractionCancelled:
            return self._report(Outcome(
                OutcomeStatus.CANCELLED,
                f"{LOG_PREFIX} Extraction stopped before any file was written.",
                ERROR,
            ))

        self._log(f"{LOG_PREFIX} Scrolling finished. Extracting data from {len(threads)} comments.")
        records: List[CommentRecord] = extract_records(threads[:target_count])

        if not records:
            return self._report(Outcome(
                OutcomeStatus.NO_RECORDS,
                f"{LOG_PREFIX} Could not extract any comments. The page structure might have changed.",
                ERROR,
            ))

        self._log(f"{LOG_PREFIX} Successfully extracted {len(records)} comments.")
        payload = serialize(records, self.document.title(), log_callback=self._log)
        try:
            path = self.sink(payload)
        except OSError as e:
            # keep the records so the host can still offer Export As
            return self._report(Outcome(
                OutcomeStatus.SAVE_FAILED,
                f"{LOG_PREFIX} Extracted {len(records)} comments but could not save {payload.filename}: {e}",
                ERROR,
                record_count=len(records),
                records=tuple(records),
            ))
        self._log(f"Comments exported to {path}")

        return self._report(Outcome(
            OutcomeStatus.SUCCESS,
            f"Extraction complete! {len(records)} comments have been saved to {path}",
            INFO,
            record_count=len(records),
            path=path,
            records=tuple(records),
        ))
