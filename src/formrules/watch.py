"""Change-notification adapter.

Binds a form to an engine so that assigning a new value to a field
revalidates that field, the way a reactive UI layer would. Only the changed
field is revalidated; ``form.valid`` stays as the last ``validate_form`` left
it.

Usage:
    watcher = FormWatcher(form, engine)
    watcher.subscribe(lambda field, valid: render(field))
    watcher.set_value("email", "someone@example.com")
"""

import logging
from collections.abc import Callable
from typing import Any, Mapping

from formrules.engine import ValidationEngine
from formrules.form import Field, Form

logger = logging.getLogger(__name__)

# Listener signature: (field, is_valid) -> None
ChangeListener = Callable[[Field, bool], None]


class FormWatcher:
    """Revalidates fields as their values change and notifies listeners.

    Listeners run sequentially in subscription order. A failing listener is
    logged and does not prevent the others from running.
    """

    def __init__(self, form: Form, engine: ValidationEngine | None = None):
        self.form = form
        self.engine = engine if engine is not None else ValidationEngine()
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_value(self, name: str, value: Any) -> bool:
        """Assign a field value, revalidating when it actually changed.

        Args:
            name: Field name (KeyError if absent)
            value: The new value

        Returns:
            True if the value changed (and the field was revalidated)
        """
        field = self.form.field(name)
        if field.value is value or _same(field.value, value):
            return False

        field.value = value
        self.engine.on_value_change(field, self.form)
        self._notify(field, not field.errors)
        return True

    def set_values(self, values: Mapping[str, Any]) -> list[str]:
        """Assign several values; returns the names of fields that changed."""
        return [name for name, value in values.items() if self.set_value(name, value)]

    def _notify(self, field: Field, is_valid: bool) -> None:
        for listener in list(self._listeners):
            try:
                listener(field, is_valid)
            except Exception:
                logger.exception(
                    "Change listener failed for field '%s'", field.name
                )


def _same(old: Any, new: Any) -> bool:
    return type(old) is type(new) and old == new
