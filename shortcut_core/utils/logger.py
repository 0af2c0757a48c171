import logging
import sys
from pathlib import Path
from typing import Iterable, List

from loguru import logger

from shortcut_core.config_manager import ConfigManager

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Routes stdlib records (uvicorn, httpx, openai) into loguru."""

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_stdlib_logging(names: Iterable[str] = ("uvicorn", "uvicorn.access", "uvicorn.error")) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in names:
        logging.getLogger(name).handlers = [InterceptHandler()]


def setup_logger(config_manager: ConfigManager) -> List[int]:
    """
    Replaces loguru's sinks with the ones the `logging` settings ask for.

    Console at `level`; `shortcut.log` at `file_level`; `shortcut.json.log` when
    `json_logs` is on; `error.log` always. Files live in `paths.log_dir`.

    Returns:
        The loguru sink ids, in the order above.
    """
    cfg = config_manager.logging
    log_path = Path(config_manager.paths.log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    file_opts = {"rotation": cfg.rotation, "retention": cfg.retention}

    logger.remove()
    sink_ids = [logger.add(sys.stderr, format=CONSOLE_FORMAT, level=cfg.level)]
    sink_ids.append(
        logger.add(log_path / "shortcut.log", level=cfg.file_level, compression=cfg.compression, **file_opts)
    )
    if cfg.json_logs:
        sink_ids.append(logger.add(log_path / "shortcut.json.log", level=cfg.level, serialize=True, **file_opts))
    sink_ids.append(logger.add(log_path / "error.log", level="ERROR", **file_opts))

    logger.info(f"Logger initialized at {cfg.level}. Logs writing to {log_path.absolute()}")
    return sink_ids
