from corsgate.schemas.message import MessageOut

__all__ = ["MessageOut"]
