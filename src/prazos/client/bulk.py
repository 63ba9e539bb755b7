"""BulkMutationCoordinator -- one operation applied to many deadlines

Every ID gets its own request; all requests are in flight together and the
batch is joined once they all settle. A failing ID never blocks the others:
failures are collected into BulkResult instead of being raised.

After a batch the caller reloads the collection from the backend rather
than patching local state with the per-ID responses.
"""

import asyncio
from collections.abc import Iterable
from typing import Annotated, Literal

import structlog
from prazos.core.models.deadline import DeadlineUpdate
from prazos.core.models.enums import DeadlineStatus, ErrorKind
from prazos.core.pipeline import Selection
from pydantic import BaseModel, Field

from .exceptions import ApiError

log = structlog.get_logger()


class SetStatus(BaseModel):
    """Change the status of every selected deadline"""

    kind: Literal["set_status"] = "set_status"
    status: DeadlineStatus = Field(description="New status")


class SetResponsible(BaseModel):
    """Reassign every selected deadline"""

    kind: Literal["set_responsible"] = "set_responsible"
    user_id: str = Field(min_length=1, description="New responsible user ID")


class DeleteDeadlines(BaseModel):
    """Delete every selected deadline"""

    kind: Literal["delete"] = "delete"


BulkOperation = Annotated[
    SetStatus | SetResponsible | DeleteDeadlines,
    Field(discriminator="kind"),
]


class BulkFailure(BaseModel):
    """One ID whose mutation failed"""

    id: str = Field(description="Deadline ID")
    kind: ErrorKind = Field(description="Failure category")
    message: str = Field(default="", description="Error description")


class BulkResult(BaseModel):
    """Outcome of a batch

    succeeded and failures together cover every submitted ID exactly once.
    """

    operation: BulkOperation
    succeeded: list[str] = Field(default_factory=list, description="IDs mutated successfully")
    failures: list[BulkFailure] = Field(default_factory=list, description="IDs that failed")

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def partial(self) -> bool:
        """Some IDs succeeded and some failed"""
        return bool(self.succeeded) and bool(self.failures)

    @property
    def failed_ids(self) -> list[str]:
        return [f.id for f in self.failures]

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failures)


class BulkMutationCoordinator:
    """Fan out one operation over a set of deadline IDs"""

    def __init__(self, api) -> None:
        """
        Args:
            api: DeadlineApiClient (or anything with update_deadline/delete_deadline)
        """
        self._api = api

    async def _apply(self, deadline_id: str, operation: BulkOperation) -> None:
        if isinstance(operation, SetStatus):
            await self._api.update_deadline(deadline_id, DeadlineUpdate(status=operation.status))
        elif isinstance(operation, SetResponsible):
            await self._api.update_deadline(
                deadline_id,
                DeadlineUpdate(responsible_user_id=operation.user_id),
            )
        else:
            await self._api.delete_deadline(deadline_id)

    async def submit(self, ids: Iterable[str], operation: BulkOperation) -> BulkResult:
        """Apply operation to every ID concurrently

        Args:
            ids: deadline IDs; duplicates are submitted once
            operation: SetStatus / SetResponsible / DeleteDeadlines

        Returns:
            BulkResult with per-ID success or failure

        Raises:
            ValueError: no IDs given
        """
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            raise ValueError("Bulk operation needs at least one deadline ID")

        log.info("bulk_mutation_started", operation=operation.kind, count=len(unique_ids))

        outcomes = await asyncio.gather(
            *(self._apply(deadline_id, operation) for deadline_id in unique_ids),
            return_exceptions=True,
        )

        result = BulkResult(operation=operation)
        for deadline_id, outcome in zip(unique_ids, outcomes):
            if outcome is None:
                result.succeeded.append(deadline_id)
                continue
            if not isinstance(outcome, Exception):
                # Cancellation and interpreter exits are not per-item failures
                raise outcome
            kind = outcome.kind if isinstance(outcome, ApiError) else ErrorKind.NETWORK
            log.warning(
                "bulk_mutation_item_failed",
                operation=operation.kind,
                deadline_id=deadline_id,
                kind=kind,
                error=str(outcome),
                error_type=type(outcome).__name__,
            )
            result.failures.append(BulkFailure(id=deadline_id, kind=kind, message=str(outcome)))

        log.info(
            "bulk_mutation_completed",
            operation=operation.kind,
            succeeded=len(result.succeeded),
            failed=len(result.failures),
        )
        return result

    async def retry_failed(self, previous: BulkResult) -> BulkResult:
        """Resubmit only the IDs that failed in a previous batch"""
        return await self.submit(previous.failed_ids, previous.operation)

    async def submit_selection(
        self,
        selection: Selection,
        operation: BulkOperation,
        order: Iterable[str] | None = None,
    ) -> tuple[BulkResult, Selection]:
        """Apply operation to the selected IDs

        Args:
            selection: current selection
            operation: operation to apply
            order: optional ID ordering (e.g. the visible list) for submission

        Returns:
            (result, next_selection) -- next_selection is empty when every ID
            succeeded, otherwise it holds just the failed IDs
        """
        ids = selection.ordered(order) if order is not None else sorted(selection.ids)
        if order is not None:
            # Selected IDs missing from the ordering still get submitted
            ids += sorted(selection.ids - set(ids))
        result = await self.submit(ids, operation)
        if result.ok:
            return result, selection.clear()
        return result, Selection(ids=frozenset(result.failed_ids))
