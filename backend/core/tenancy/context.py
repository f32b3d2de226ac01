from contextvars import ContextVar, Token
from typing import Optional


_current_correlation_id: ContextVar[Optional[str]] = ContextVar(
    "current_correlation_id", default=None
)


def get_current_correlation_id() -> Optional[str]:
    return _current_correlation_id.get()


def set_current_correlation_id(correlation_id: Optional[str]) -> Token:
    return _current_correlation_id.set(correlation_id)


def reset_current_correlation_id(token: Token) -> None:
    _current_correlation_id.reset(token)
