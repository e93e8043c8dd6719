import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
CORS_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[cors_state]: <8} | {extra[request_origin]} | {message}"


def _is_cors_record(record) -> bool:
    return "cors_state" in record["extra"]


def cors_logger(origin: str | None, state: str):
    """Logger con el origen y el estado de la decisión CORS como campos extra."""
    return logger.bind(request_origin=origin or "-", cors_state=str(state))


def setup_logging(environment: str = "development", log_dir: str = "logs") -> None:
    """Configura los sinks de loguru.

    En producción solo JSON por stdout (los campos CORS viajan en ``extra``).
    Fuera de producción: consola con color y, salvo en ``test``, dos ficheros
    rotados: ``app.log`` con todo y ``cors.log`` solo con las decisiones CORS.
    """
    logger.remove()
    if environment == "production":
        logger.add(sys.stdout, level="INFO", serialize=True)
        return

    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="DEBUG")
    if environment == "test":
        return

    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"No se pudo crear el directorio de logs {log_dir}: {e}")
        return
    logger.add(f"{log_dir}/app.log", rotation="50 MB", retention="10 days", compression="zip", level="DEBUG")
    logger.add(
        f"{log_dir}/cors.log",
        rotation="10 MB",
        retention="7 days",
        level="DEBUG",
        format=CORS_FORMAT,
        filter=_is_cors_record,
    )
