"""
Submission controller for the contact form.

Owns the draft values, the per-field errors and the submission status of a
single visible form, and drives them through

    idle -> sending -> idle      (validation failed)
    idle -> sending -> success   (hand-off opened, idle again after a delay)
    idle -> sending -> error     (hand-off could not be opened)

Transitions happen on discrete user or timer events. They are serialised by
a re-entrant lock, so a reset timer firing on a ThreadingScheduler thread
cannot interleave with a submit; listeners run on whichever thread caused
the change. Hosts with an asyncio loop should pass an AsyncioScheduler to
keep every transition on the loop thread.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from portfolio.core.config import Settings, settings
from portfolio.core.exceptions import HandoffError
from portfolio.core.logging import get_logger, log_event
from portfolio.schemas.contact import (
    ContactDraft,
    ContactField,
    FieldErrors,
    SubmissionStatus,
    validate_contact,
)
from portfolio.services.handoff_service import (
    HandoffService,
    build_handoff_url,
    handoff_service,
)
from portfolio.services.scheduler import Scheduler, ThreadingScheduler, TimerHandle

logger = get_logger(__name__)


class ContactFormState(BaseModel):
    """Snapshot of a controller handed to the presentation layer."""

    values: Dict[str, str]
    errors: FieldErrors = Field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.IDLE
    inputs_disabled: bool = False
    handoff_error: Optional[str] = None


Listener = Callable[[ContactFormState], None]


class ContactFormController:
    """State machine behind one contact form."""

    def __init__(
        self,
        handoff: Optional[HandoffService] = None,
        scheduler: Optional[Scheduler] = None,
        config: Optional[Settings] = None,
    ):
        self.handoff = handoff or handoff_service
        self.scheduler = scheduler or ThreadingScheduler()
        self.config = config or settings

        self._draft = ContactDraft()
        self._errors: FieldErrors = {}
        self._status = SubmissionStatus.IDLE
        self._handoff_error: Optional[str] = None
        self._listeners: List[Listener] = []

        self._reset_timer: Optional[TimerHandle] = None
        # Bumped whenever a pending reset becomes stale
        self._reset_generation = 0
        self._closed = False
        self._lock = threading.RLock()

    def __enter__(self) -> "ContactFormController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def values(self) -> Dict[str, str]:
        return self._draft.model_dump()

    @property
    def errors(self) -> FieldErrors:
        return dict(self._errors)

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def inputs_disabled(self) -> bool:
        return self._status == SubmissionStatus.SENDING

    @property
    def closed(self) -> bool:
        return self._closed

    def state(self) -> ContactFormState:
        with self._lock:
            return ContactFormState(
                values=self.values,
                errors=self.errors,
                status=self._status,
                inputs_disabled=self.inputs_disabled,
                handoff_error=self._handoff_error,
            )

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update_field(self, field: Union[ContactField, str], value: str) -> None:
        """
        Store the raw value typed into a field.

        Clears the recorded error of that field only.

        Raises:
            ValueError: field is not one of name, email, message
        """
        field = ContactField(field)
        with self._lock:
            setattr(self._draft, field.value, value)
            self._errors.pop(field.value, None)
            self._notify()

    def submit(self) -> SubmissionStatus:
        """
        Validate the draft and, when valid, hand it off to the messaging app.

        Returns:
            The status the form settled in: idle (validation failed),
            success (hand-off opened) or error (hand-off failed). A submit
            while already sending is ignored and returns sending.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Contact form controller is closed")
            if self._status == SubmissionStatus.SENDING:
                logger.debug("Ignoring submit while a submission is in progress")
                return self._status

            self._cancel_reset_timer()
            self._errors = {}
            self._handoff_error = None
            self._set_status(SubmissionStatus.SENDING)

            outcome = validate_contact(self._draft)
            if not outcome.is_valid:
                self._errors = dict(outcome.errors)
                log_event(
                    logger,
                    logging.INFO,
                    "contact_validation_failed",
                    fields=list(self._errors),
                )
                self._set_status(SubmissionStatus.IDLE)
                return self._status

            url = build_handoff_url(outcome.record, self.config)
            try:
                self.handoff.hand_off(url)
            except HandoffError as e:
                # The draft is kept so the user can submit again
                self._handoff_error = e.reason
                self._set_status(SubmissionStatus.ERROR)
                return self._status

            self._draft = ContactDraft()
            self._set_status(SubmissionStatus.SUCCESS)
            self._arm_reset_timer()
            return self._status

    def close(self) -> None:
        """Tear down the form; a pending reset will no longer fire."""
        with self._lock:
            self._cancel_reset_timer()
            self._closed = True
            self._listeners.clear()

    def _set_status(self, status: SubmissionStatus) -> None:
        self._status = status
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.state()
        for listener in list(self._listeners):
            listener(state)

    def _arm_reset_timer(self) -> None:
        self._reset_generation += 1
        generation = self._reset_generation
        self._reset_timer = self.scheduler.call_later(
            self.config.SUCCESS_RESET_SECONDS,
            lambda: self._expire_success(generation),
        )

    def _cancel_reset_timer(self) -> None:
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None
        self._reset_generation += 1

    def _expire_success(self, generation: int) -> None:
        # The generation check and the write happen under one lock hold
        with self._lock:
            if self._closed or generation != self._reset_generation:
                return
            self._reset_timer = None
            self._reset_generation += 1
            if self._status != SubmissionStatus.SUCCESS:
                return
            log_event(logger, logging.DEBUG, "contact_status_reset")
            self._set_status(SubmissionStatus.IDLE)
