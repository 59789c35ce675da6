"""DomainService — ServiceResult-returning facade over an ERDomain.

Wraps every library operation so callers (the CLI, scripts) get a uniform
result object instead of exceptions, and adds ``run_script`` for applying
a list of operations in order.

Script steps are dicts naming a service method in ``op``; the remaining
keys are that method's keyword arguments (``type`` is accepted as an
alias of ``mark``)::

    [
        {"op": "add_link_type", "mark": "path", "options": {"transitive": true}},
        {"op": "link", "type": "path", "entities": ["x", "y"]},
        {"op": "are_linked", "type": "path", "entities": ["x", "y"]}
    ]
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from erdomain.config.models import DomainConfig
from erdomain.core import ERDomain
from erdomain.domain.errors import AlreadyExistsError, NotFoundError
from erdomain.services.result import ErrorCode, ServiceResult
from erdomain.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from erdomain.domain.types import LinkTypeOptions, OptionsLike

logger = logging.getLogger(__name__)

# Service methods a script step may name.
SCRIPT_OPS = frozenset(
    {
        "add_entity",
        "edit_entity",
        "remove_entity",
        "has_entity",
        "get_entity",
        "add_link_type",
        "edit_link_type",
        "remove_link_type",
        "get_link_type",
        "link_types",
        "link",
        "are_linked",
        "unlink",
        "unlink_all",
        "edges",
    }
)


def build_domain(link_types: Mapping[str, LinkTypeOptions] | None = None) -> ERDomain:
    """Create an empty domain with *link_types* pre-registered."""
    domain = ERDomain()
    for mark, options in (link_types or {}).items():
        domain.add_link_type(mark, options)
    return domain


def _hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _unhashable(op: str, what: str, value: Any) -> ServiceResult:
    return ServiceResult.failure(
        op,
        ErrorCode.INVALID_ARGS,
        f"{what} must be hashable, got {value!r}",
    )


def _pair(op: str, entities: Any) -> tuple[Any, Any] | ServiceResult:
    if isinstance(entities, (list, tuple)) and len(entities) == 2:
        for entity in entities:
            if not _hashable(entity):
                return _unhashable(op, "Entity id", entity)
        return entities[0], entities[1]
    return ServiceResult.failure(
        op,
        ErrorCode.INVALID_ARGS,
        f"Expected a pair of entities, got {entities!r}",
    )


class DomainService:
    """Entity, link-type and link operations returning ServiceResult."""

    def __init__(self, domain: ERDomain, config: DomainConfig | None = None) -> None:
        self._domain = domain
        config = config or DomainConfig()
        self._name = config.name
        self._consistent_removal = config.consistent_removal

    @property
    def domain(self) -> ERDomain:
        return self._domain

    def _guarded(self, op: str, action: Callable[[], dict[str, Any]]) -> ServiceResult:
        """Run *action*, mapping domain and validation errors to failures."""
        try:
            data = action()
        except AlreadyExistsError as exc:
            return ServiceResult.failure(op, ErrorCode.ALREADY_EXISTS, str(exc))
        except NotFoundError as exc:
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, str(exc))
        except ValidationError as exc:
            msg = f"Invalid link type options: {exc.error_count()} error(s)"
            return ServiceResult.failure(op, ErrorCode.INVALID_OPTIONS, msg)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    @traced
    def add_entity(self, entity: Any, payload: Any = None) -> ServiceResult:
        def action() -> dict[str, Any]:
            self._domain.add_entity(entity, payload)
            return {"id": entity}

        return self._guarded("add_entity", action)

    @traced
    def edit_entity(self, entity: Any, payload: Any) -> ServiceResult:
        def action() -> dict[str, Any]:
            self._domain.edit_entity(entity, payload)
            return {"id": entity}

        return self._guarded("edit_entity", action)

    @traced
    def remove_entity(self, entity: Any) -> ServiceResult:
        existed = self._domain.has_entity(entity)
        self._domain.remove_entity(entity)
        return ServiceResult(ok=True, op="remove_entity", data={"id": entity, "removed": existed})

    @traced
    def has_entity(self, entity: Any) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="has_entity",
            data={"id": entity, "exists": self._domain.has_entity(entity)},
        )

    @traced
    def get_entity(self, entity: Any, silent: bool = False) -> ServiceResult:
        def action() -> dict[str, Any]:
            payload = self._domain.get_entity_details(entity, silent=silent)
            return {"id": entity, "payload": payload}

        return self._guarded("get_entity", action)

    # ------------------------------------------------------------------
    # Link types
    # ------------------------------------------------------------------

    @traced
    def add_link_type(self, mark: Any, options: OptionsLike = None) -> ServiceResult:
        def action() -> dict[str, Any]:
            self._domain.add_link_type(mark, options)
            return self._describe_type(mark)

        return self._guarded("add_link_type", action)

    @traced
    def edit_link_type(self, mark: Any, options: OptionsLike = None) -> ServiceResult:
        def action() -> dict[str, Any]:
            self._domain.edit_link_type(mark, options)
            return self._describe_type(mark)

        return self._guarded("edit_link_type", action)

    @traced
    def remove_link_type(self, mark: Any, consistent: bool | None = None) -> ServiceResult:
        """Unregister *mark*; *consistent* defaults to the configured policy."""
        if consistent is None:
            consistent = self._consistent_removal
        existed = self._domain.has_link_type(mark)
        before = len(self._domain.edges(mark)) if existed and consistent else 0
        self._domain.remove_link_type(mark, consistent=consistent)
        return ServiceResult(
            ok=True,
            op="remove_link_type",
            data={
                "type": mark,
                "removed": existed,
                "consistent": consistent,
                "links_removed": before,
            },
        )

    @traced
    def get_link_type(self, mark: Any, silent: bool = False) -> ServiceResult:
        def action() -> dict[str, Any]:
            options = self._domain.get_link_type_info(mark, silent=silent)
            return {"type": mark, "options": options.model_dump() if options else None}

        return self._guarded("get_link_type", action)

    @traced
    def link_types(self) -> ServiceResult:
        items = [self._describe_type(mark) for mark in self._domain.get_link_types()]
        return ServiceResult(ok=True, op="link_types", data={"count": len(items), "items": items})

    def _describe_type(self, mark: Any) -> dict[str, Any]:
        options = self._domain.get_link_type_info(mark)
        return {"type": mark, **(options.model_dump() if options else {})}

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    @traced
    def link(self, mark: Any, entities: Any, payload: Any = None) -> ServiceResult:
        """Link a pair and report the closure sets that were materialized."""
        pair = _pair("link", entities)
        if isinstance(pair, ServiceResult):
            return pair

        def action() -> dict[str, Any]:
            with trace_span("propagate") as span:
                propagation = self._domain.link(mark, pair, payload)
                if span is not None:
                    span.annotate("written", propagation.written)
            return {
                "type": mark,
                "source": pair[0],
                "target": pair[1],
                "sources": list(propagation.sources),
                "targets": list(propagation.targets),
                "written": propagation.written,
            }

        return self._guarded("link", action)

    @traced
    def are_linked(self, entities: Any, mark: Any = None) -> ServiceResult:
        pair = _pair("are_linked", entities)
        if isinstance(pair, ServiceResult):
            return pair
        return ServiceResult(
            ok=True,
            op="are_linked",
            data={
                "entities": list(pair),
                "type": mark,
                "linked": self._domain.are_linked(pair, mark),
            },
        )

    @traced
    def unlink(self, entities: Any, mark: Any = None) -> ServiceResult:
        if isinstance(entities, (list, tuple)):
            pair = _pair("unlink", entities)
            if isinstance(pair, ServiceResult):
                return pair
            entities = pair
        elif not _hashable(entities):
            return _unhashable("unlink", "Entity id", entities)
        removed = self._domain.unlink(entities, mark)
        return ServiceResult(ok=True, op="unlink", data={"type": mark, "removed": removed})

    @traced
    def unlink_all(self, mark: Any = None) -> ServiceResult:
        removed = self._domain.unlink_all(mark)
        return ServiceResult(ok=True, op="unlink_all", data={"type": mark, "removed": removed})

    @traced
    def edges(self, mark: Any = None) -> ServiceResult:
        items = [
            {"source": e.source, "target": e.target, "type": e.mark, "payload": e.payload}
            for e in self._domain.edges(mark)
        ]
        return ServiceResult(ok=True, op="edges", data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    @traced
    def run_script(
        self,
        steps: list[dict[str, Any]],
        *,
        partial: bool = False,
    ) -> ServiceResult:
        """Apply *steps* in order.

        Stops at the first failing step unless *partial* is True. Steps
        already applied are not rolled back.
        """
        results: list[dict[str, Any]] = []
        errors: list[dict[str, Any]] = []

        for index, step in enumerate(steps):
            result = self._run_step(step)
            if result.ok:
                results.append({"index": index, "op": result.op, **result.data})
                continue

            message = result.error.message if result.error else ""
            errors.append(
                {
                    "index": index,
                    "op": result.op,
                    "code": result.error.code if result.error else "",
                    "error": message,
                }
            )
            logger.debug("Script step %d (%s) failed: %s", index, result.op, message)
            if not partial:
                return ServiceResult.failure(
                    "run_script",
                    ErrorCode.SCRIPT_FAILED,
                    f"Step {index} failed: {message}",
                    results=results,
                    errors=errors,
                )

        if errors:
            return ServiceResult.failure(
                "run_script",
                ErrorCode.SCRIPT_PARTIAL,
                f"{len(errors)} of {len(steps)} steps failed",
                results=results,
                errors=errors,
            )
        return ServiceResult(
            ok=True,
            op="run_script",
            data={
                "domain": self._name,
                "count": len(results),
                "results": results,
                "errors": [],
            },
        )

    def _run_step(self, step: Any) -> ServiceResult:
        if not isinstance(step, dict):
            return ServiceResult.failure(
                "run_script", ErrorCode.INVALID_ARGS, "Each step must be an object"
            )
        op = step.get("op")
        if op not in SCRIPT_OPS:
            return ServiceResult.failure(
                str(op), ErrorCode.UNKNOWN_OP, f"Unknown operation {op!r}"
            )

        kwargs = {k: v for k, v in step.items() if k != "op"}
        if "type" in kwargs:
            kwargs.setdefault("mark", kwargs.pop("type"))
        if "id" in kwargs:
            kwargs.setdefault("entity", kwargs.pop("id"))
        for key, what in (("mark", "Link type"), ("entity", "Entity id")):
            if key in kwargs and not _hashable(kwargs[key]):
                return _unhashable(op, what, kwargs[key])

        method = getattr(self, op)
        try:
            inspect.signature(method).bind(**kwargs)
        except TypeError as exc:
            return ServiceResult.failure(op, ErrorCode.INVALID_ARGS, str(exc))
        return method(**kwargs)
