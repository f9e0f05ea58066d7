from collections.abc import Generator
from dataclasses import dataclass

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.activity import DEFAULT_USER, UNKNOWN_IP


@dataclass(frozen=True)
class Actor:
    user: str
    ip_address: str


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_client_ip(
    request: Request,
    x_forwarded_for: str | None = Header(default=None),
) -> str:
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip() or UNKNOWN_IP
    if request.client is not None:
        return request.client.host
    return UNKNOWN_IP


def get_actor(
    x_user: str | None = Header(default=None),
    ip_address: str = Depends(get_client_ip),
) -> Actor:
    # No authentication layer; the caller names itself.
    return Actor(user=(x_user or "").strip() or DEFAULT_USER, ip_address=ip_address)
