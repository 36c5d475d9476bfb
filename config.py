"""Configuração lida do ambiente (e de um .env, se existir)."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PDA_FILE = "PDA.txt"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_THEME = "light"


@dataclass
class Settings:
    pda_file: str = DEFAULT_PDA_FILE
    max_steps: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    theme: str = DEFAULT_THEME


def _parse_max_steps(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("PDA_MAX_STEPS inválido: %r; sem limite de passos.", raw)
        return None
    return value if value > 0 else None


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        pda_file=os.getenv("PDA_FILE", DEFAULT_PDA_FILE),
        max_steps=_parse_max_steps(os.getenv("PDA_MAX_STEPS")),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        log_file=os.getenv("LOG_FILE") or None,
        theme=os.getenv("PDA_THEME", DEFAULT_THEME),
    )
