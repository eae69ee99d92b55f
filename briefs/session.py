"""
Per-session state for the brief form.

SessionState is never mutated: every change builds a new state and swaps it
in, then listeners get (old, new). At most one analysis runs at a time, even
across threads; a second request while one is running is refused rather than
queued.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, FrozenSet, List, NamedTuple, Optional

from briefs import Assessment
from briefs.analyst import analyze_task, validate_inputs
from utils.config import Settings
from utils.errors import InvalidInputError, RiskBriefError, UnknownError, user_message

logger = logging.getLogger(__name__)


class AnalysisRequest(NamedTuple):
    task: str
    expertise: str
    environment: str


@dataclass(frozen=True)
class SessionState:
    assessment: Optional[Assessment] = None
    loading: bool = False
    error: Optional[str] = None
    checked_items: FrozenSet[int] = field(default_factory=frozenset)
    last_request: Optional[AnalysisRequest] = None


Listener = Callable[[SessionState, SessionState], None]


class SessionController:
    def __init__(self, settings: Settings, analyze=analyze_task):
        self._settings = settings
        self._analyze = analyze
        self._state = SessionState()
        self._listeners: List[Listener] = []
        # held for the whole analysis; threaded servers share one controller per sid
        self._busy = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> None:
        old = self._state
        self._state = replace(old, **changes)
        for listener in list(self._listeners):
            listener(old, self._state)

    def analyze(self, task: str, expertise: str, environment: str) -> bool:
        """Run one analysis. Returns False if one is already in flight."""
        if not self._busy.acquire(blocking=False):
            logger.warning("Analysis already in progress; ignoring new request")
            return False
        try:
            self._run(task, expertise, environment)
        finally:
            self._busy.release()
        return True

    def _run(self, task: str, expertise: str, environment: str) -> None:
        try:
            validate_inputs(task, expertise, environment)
        except InvalidInputError as e:
            self._set(error=user_message(e))
            return

        request = AnalysisRequest(task, expertise, environment)
        self._set(
            loading=True,
            error=None,
            assessment=None,
            checked_items=frozenset(),
            last_request=request,
        )

        try:
            result = self._analyze(task, expertise, environment, self._settings)
        except RiskBriefError as e:
            logger.error("Risk analysis error (%s): %s", e.kind, e)
            self._set(loading=False, error=user_message(e))
            return
        except Exception as e:
            logger.exception("Unexpected risk analysis error")
            self._set(loading=False, error=user_message(UnknownError(str(e))))
            return

        self._set(loading=False, assessment=result)

    def retry(self) -> bool:
        request = self._state.last_request
        if request is None:
            return False
        return self.analyze(*request)

    def reset(self) -> None:
        self._set(assessment=None, loading=False, error=None, checked_items=frozenset())

    def clear_error(self) -> None:
        self._set(error=None)

    def toggle_checklist_item(self, index: int) -> None:
        assessment = self._state.assessment
        if assessment is None or not 0 <= index < len(assessment.pre_task_checklist):
            return
        checked = set(self._state.checked_items)
        if index in checked:
            checked.remove(index)
        else:
            checked.add(index)
        self._set(checked_items=frozenset(checked))

    @property
    def needs_reset_confirmation(self) -> bool:
        return bool(self._state.checked_items)

    @property
    def checklist_progress(self):
        """(done, total, percent) for the current checklist."""
        assessment = self._state.assessment
        total = len(assessment.pre_task_checklist) if assessment else 0
        done = len(self._state.checked_items)
        percent = (done / total) * 100 if total else 0.0
        return done, total, percent
