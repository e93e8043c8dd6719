"""Capa de datos de los mensajes de demostración."""
from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from corsgate.models.message import Message

DEMO_MESSAGES = [
    ("server", "Hello from the CORS demo server"),
    ("server", "Cross-origin reads need Access-Control-Allow-Origin"),
    ("server", "Direct requests carry no Origin header"),
]


def list_messages(db: Session, limit: int = 50) -> list[Message]:
    return db.query(Message).order_by(desc(Message.created_at), desc(Message.id)).limit(limit).all()


def seed_demo_messages(db: Session) -> int:
    if db.query(Message.id).first() is not None:
        return 0
    for author, body in DEMO_MESSAGES:
        db.add(Message(author=author, body=body))
    db.commit()
    logger.info(f"Mensajes de demostración creados: {len(DEMO_MESSAGES)}")
    return len(DEMO_MESSAGES)
