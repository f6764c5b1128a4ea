"""Contact form state machine.

There is no backend: a submission that passes field validation waits a fixed
delay and then always succeeds.
"""

import logging
import re
import time
from typing import Callable, Dict, Optional

from config import settings
from contracts import ContactFormData, ContactFormState, FormStatus

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
FIELDS = ("name", "email", "message")


def validate_contact_form(data: ContactFormData) -> Dict[str, str]:
    """Return field -> error message for every invalid field."""
    errors: Dict[str, str] = {}
    if not data.name.strip():
        errors["name"] = "Name is required"
    if not data.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(data.email):
        errors["email"] = "Please enter a valid email address"
    if not data.message.strip():
        errors["message"] = "Message is required"
    return errors


class ContactForm:
    """Owns the contact form state and drives its transitions.

    editing --submit (valid)--> submitting --delay--> submitted
    editing --submit (invalid)--> editing (with errors)
    submitted --send_another--> editing
    """

    def __init__(
        self,
        submit_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.submit_delay = settings.contact_submit_delay_seconds if submit_delay is None else submit_delay
        self._sleep = sleep
        self.state = ContactFormState()

    @property
    def status(self) -> FormStatus:
        return self.state.status

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self.state.errors)

    def edit(self, field: str, value: str) -> ContactFormState:
        """Update one field and clear its error."""
        if field not in FIELDS:
            raise KeyError(f"Unknown contact form field: {field}")
        if self.state.status != FormStatus.EDITING:
            raise RuntimeError(f"Cannot edit while {self.state.status.value}")
        data = self.state.data.model_copy(update={field: value})
        errors = {k: v for k, v in self.state.errors.items() if k != field}
        self.state = self.state.model_copy(update={"data": data, "errors": errors})
        return self.state

    def validate(self) -> bool:
        """Validate all fields, record errors, return True when valid."""
        errors = validate_contact_form(self.state.data)
        self.state = self.state.model_copy(update={"errors": errors})
        return not errors

    def submit(self) -> ContactFormState:
        """Validate and, when valid, simulate sending the message."""
        if self.state.status != FormStatus.EDITING:
            raise RuntimeError(f"Cannot submit while {self.state.status.value}")
        if not self.validate():
            return self.state

        self.state = self.state.model_copy(update={"status": FormStatus.SUBMITTING})
        self._sleep(self.submit_delay)
        logger.info("Contact form submitted by %s", self.state.data.email)

        self.state = ContactFormState(status=FormStatus.SUBMITTED)
        return self.state

    def send_another(self) -> ContactFormState:
        """Leave the thank-you view and show an empty form again."""
        if self.state.status != FormStatus.SUBMITTED:
            raise RuntimeError("Nothing has been submitted yet")
        self.state = ContactFormState()
        return self.state
