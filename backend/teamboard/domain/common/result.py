"""Result<T> pattern: domain functions return this instead of raising exceptions for normal flow."""
from __future__ import annotations
from typing import Generic, Iterable, List, Optional, TypeVar, Union

from teamboard.domain.common.errors import ErrorDescriptor, ExternalError, error_factory

T = TypeVar("T")

Error = Union[ErrorDescriptor, ExternalError]


class Result(Generic[T]):
    """
    Either ok (``value``, possibly None) or failed (a non-empty ``errors`` list).

    ``fail_if`` builds failures that carry internal detail for the logs;
    ``fail`` projects them onto their external ``{code, message}`` pairs before
    they leave the core.
    """

    def __init__(self, value: Optional[T] = None, errors: Optional[Iterable[Error]] = None):
        self.value = value
        self.errors: Optional[List[Error]] = list(errors) if errors else None

    @property
    def is_success(self) -> bool:
        return not self.errors

    @property
    def is_error(self) -> bool:
        return bool(self.errors)

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail_if(
        cls,
        predicate: bool,
        external_message: str = "Bad request.",
        external_code: int = 400,
        internal_message: Optional[str] = None,
        internal_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
        logger=None,
    ) -> "Result[None]":
        """Failed Result with one logged error if ``predicate`` holds, otherwise a neutral ok(None)."""
        if predicate:
            return cls(errors=[
                error_factory(
                    external_message,
                    external_code,
                    internal_message,
                    internal_code,
                    cause=cause,
                    context=context,
                    logger=logger,
                )
            ])
        return cls()

    @classmethod
    def fail(cls, result: "Result") -> "Result[None]":
        """Presentation-ready failure: only the external ``{code, message}`` of each error survives."""
        errors = []
        for err in result.errors or []:
            if isinstance(err, ExternalError):
                errors.append(err)
            elif isinstance(err, ErrorDescriptor):
                errors.append(err.external)
            else:
                errors.append(ExternalError(code=500, message=str(err)))
        return cls(errors=errors)

    @classmethod
    def merge(cls, results: Iterable["Result"]) -> "Result":
        """
        Combine results. Any failure → one failure with every error, in input order.
        Otherwise the non-None values: none → None, one → that value, many → list.
        """
        results = list(results)
        errors: List[Error] = []
        for result in results:
            if result.is_error:
                errors.extend(result.errors)
        if errors:
            return cls(errors=errors)

        values = [r.value for r in results if r.value is not None]
        if not values:
            return cls.ok()
        if len(values) == 1:
            return cls.ok(values[0])
        return cls.ok(values)

    def to_list(self) -> List[dict]:
        """External error array for serialization (empty on success)."""
        return [e.to_dict() for e in Result.fail(self).errors or []]

    @property
    def status_code(self) -> int:
        """HTTP status for this result: 200 on success, else the first external code."""
        if self.is_success:
            return 200
        first = self.errors[0]
        return first.external.code if isinstance(first, ErrorDescriptor) else getattr(first, "code", 500)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self.value!r})"
        return f"Result.fail({self.errors!r})"
