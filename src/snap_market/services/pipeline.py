"""Ordered page load steps with short-circuit on failure."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from snap_market.domain.errors import FetchFailureError
from snap_market.domain.models import AuthSession
from snap_market.domain.notices import Notice
from snap_market.services.viewers import Viewer

logger = logging.getLogger(__name__)


@dataclass
class PageContext:
    """State gathered while loading a page."""

    session: AuthSession | None = None
    viewer: Viewer | None = None
    data: dict[str, object] = field(default_factory=dict)
    notices: list[Notice] = field(default_factory=list)
    completed: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(notice.is_error for notice in self.notices)


Step = Callable[[PageContext], None]


@dataclass
class LoadPipeline:
    """Run named steps strictly in order; a failed fetch stops the rest.

    AuthRequiredError is not caught so routes can redirect before any fetch.
    """

    steps: list[tuple[str, Step]] = field(default_factory=list)

    def then(self, name: str, step: Step) -> "LoadPipeline":
        """Return a pipeline with one more step appended."""
        return LoadPipeline(steps=[*self.steps, (name, step)])

    def run(self, context: PageContext | None = None) -> PageContext:
        """Execute the steps against a context and return it."""
        context = context or PageContext()
        for name, step in self.steps:
            try:
                step(context)
            except FetchFailureError as exc:
                logger.warning("Page load step failed", extra={"step": name})
                context.notices.append(Notice.error(str(exc)))
                break
            context.completed.append(name)
        return context
