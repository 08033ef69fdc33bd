"""Error taxonomy shared across cuelight operations.

Three kinds of failure reach callers:

- ``NotFoundError``: a referenced project, cue list, fixture, cue or scene
  has no matching record.
- ``InputValidationError``: caller input is unusable (empty id lists, no
  update fields, a destructive operation without confirmation). Raised
  before any external call is made.
- ``OperationFailedError``: a collaborator (completion service, backend)
  failed; carries an operation-specific prefix.

Malformed generative output is never an error. It is absorbed by the
response parser and the fixture value validator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class CueLightError(Exception):
    """Base class for all cuelight errors."""

    pass


class NotFoundError(CueLightError):
    """Raised when a referenced entity does not exist.

    Args:
        entity: Entity kind (e.g. "Project", "Cue list", "Scene")
        entity_id: Identifier that failed to resolve
        key: What the identifier is (e.g. "ID", "name")
    """

    def __init__(self, entity: str, entity_id: str, *, key: str = "ID") -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with {key} {entity_id} not found")


class InputValidationError(CueLightError):
    """Raised when caller input fails validation before any external call."""

    pass


class ExternalServiceError(CueLightError):
    """Base class for failures raised by external collaborators."""

    pass


class OperationFailedError(CueLightError):
    """Collaborator failure wrapped with the name of the failing operation.

    Args:
        operation: Operation description (e.g. "create cue sequence")
        cause: Underlying collaborator error
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")


@contextmanager
def external_failure(operation: str) -> Iterator[None]:
    """Wrap collaborator failures raised inside the block.

    Any exception is wrapped except cuelight domain errors (not found,
    input validation, an already wrapped failure), which propagate
    unchanged.

    Args:
        operation: Operation description used as the message prefix

    Raises:
        OperationFailedError: If a collaborator error escapes the block

    Example:
        >>> with external_failure("create cue sequence"):
        ...     await backend.create_cue_list(...)
    """
    try:
        yield
    except (NotFoundError, InputValidationError, OperationFailedError):
        raise
    except Exception as e:
        logger.error(f"Failed to {operation}: {e}")
        raise OperationFailedError(operation, e) from e
