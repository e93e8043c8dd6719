from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from corsgate.api.deps import cors_gate
from corsgate.core.database import get_db
from corsgate.cors.gate import GateResult
from corsgate.schemas.message import MessageOut
from corsgate.services import message_service

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=list[MessageOut])
def get_messages(
    gate: GateResult = Depends(cors_gate),
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
):
    """Lista mensajes. Si el origen no puede leer la respuesta, devuelve lista vacía sin consultar la BD."""
    if not gate.proceed:
        return []
    return [m.to_dict() for m in message_service.list_messages(db, limit=limit)]
