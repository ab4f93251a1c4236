"""Uniform success/failure envelope returned by the expense operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult[T]":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Render as ``{success, data?, error?}`` with JSON-native data."""
        payload: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            payload["data"] = _to_native(self.data)
        if self.error is not None:
            payload["error"] = self.error
        return payload


def _to_native(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_native(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_native(item) for key, item in value.items()}
    return value
