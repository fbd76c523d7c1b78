"""Turn a raw form submission into the record that gets persisted."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .definitions import FieldDefinition, Labels
from .errors import FieldValidationError, MalformedSubmissionError, UnsupportedFieldType
from .logger import get_logger, safe_display
from .notices import Notice
from .registry import FieldRegistry

logger = get_logger(__name__)


def _ensure_mapping(raw_input: Any, labels: Labels) -> Mapping[str, Any]:
    if not isinstance(raw_input, Mapping):
        raise MalformedSubmissionError(labels.malformed_submission)
    return raw_input


def _validate(definition: FieldDefinition, value: Any, labels: Labels) -> None:
    """Run the field's custom validator; raise FieldValidationError on rejection."""
    if definition.validate_callback is None:
        return
    template = labels.validation_error
    message = template.replace("%s", definition.label, 1)
    try:
        accepted = definition.validate_callback(value)
    except FieldValidationError as exc:
        raise FieldValidationError(str(exc) or message, definition.id, definition.label) from exc
    except Exception as exc:
        logger.exception("Validator for %s raised; rejecting the value", definition.id)
        raise FieldValidationError(message, definition.id, definition.label) from exc
    if not accepted:
        raise FieldValidationError(message, definition.id, definition.label)


def sanitize_submission(
    raw_input: Any,
    fields_in_scope: Iterable[FieldDefinition],
    prior_record: Any,
    *,
    registry: FieldRegistry,
    labels: Labels | None = None,
    notices: list[Notice] | None = None,
) -> dict[str, Any]:
    """Sanitize `raw_input` for the in-scope fields and merge it over `prior_record`.

    Keys of `prior_record` that belong to fields outside the active scope are
    carried over unchanged. Problems are appended to `notices`; only a payload
    that is not a mapping aborts the merge, in which case the prior record is
    returned as is.
    """
    labels = labels or Labels()
    notices = notices if notices is not None else []
    prior = dict(prior_record) if isinstance(prior_record, Mapping) else {}

    try:
        submitted = _ensure_mapping(raw_input, labels)
    except MalformedSubmissionError as exc:
        logger.warning("Rejected submission of type %s", type(raw_input).__name__)
        notices.append(exc.to_notice())
        return prior

    computed: dict[str, Any] = {}
    for definition in fields_in_scope:
        if definition.type == "description":
            continue

        try:
            behavior = registry.create(definition.type, definition)
        except UnsupportedFieldType:
            logger.error("Field %s has unsupported type %s; keeping its configured default", definition.id, definition.type)
            computed[definition.id] = definition.default if definition.default is not None else ""
            continue

        if definition.id not in submitted:
            computed[definition.id] = behavior.get_default_value()
            continue

        value = behavior.sanitize(submitted[definition.id])
        try:
            _validate(definition, value, labels)
        except FieldValidationError as exc:
            logger.info("Validation failed for %s; reverting to default", definition.id)
            notices.append(exc.to_notice())
            value = behavior.get_default_value()

        logger.debug("Sanitized %s", safe_display(definition.id, value))
        computed[definition.id] = value

    return {**prior, **computed}
