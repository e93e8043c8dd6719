from corsgate.core.database import Base
from corsgate.models.message import Message

__all__ = ["Base", "Message"]
