"""Inference engine exceptions: tag protocol and site ownership violations."""

from typing import Any

from .base import DynamicATIError


class EngineError(DynamicATIError):
    """Base class for errors raised by the inference engine."""

    pass


class UnknownTagError(EngineError):
    """Raised when a tag is looked up or merged before it was introduced.

    This is always a contract violation by the instrumentation layer: every
    tag must come from ``mint_tracked`` or ``mint_untracked`` first.
    """

    def __init__(self, tag: Any):
        super().__init__(f"Unknown tag: {tag!r}", details={"tag": repr(tag)})
        self.tag = tag


class AlreadyCheckedOutError(EngineError):
    """Raised when a site id is checked out while a previous checkout is in flight."""

    def __init__(self, site_id: str):
        super().__init__(
            f"Site already checked out: {site_id}",
            details={
                "site_id": site_id,
                "reason": "commit the in-flight site before checking it out again",
            },
        )
        self.site_id = site_id
