# src/atlantis_planner/core/log.py
"""
Log estruturado do atlantis-planner.

Este módulo define o `SimpleLogger`, o handle de log passado ao planner
e anexado a cada `StepMeta`. Mensagens são registradas como eventos
estruturados, não como texto livre em um stream.

Formato do evento:
    - source: origem da mensagem (ex.: repositório/PR)
    - level: DEBUG, INFO, WARN ou ERROR
    - message: mensagem já formatada
    - timestamp: instante UTC em ISO-8601

Decisões arquiteturais:
    - Mensagens usam formatação estilo printf (`"%s"`), aplicada apenas
      quando o evento não é filtrado pelo nível
    - Loggers derivados (`bind`) compartilham a mesma lista de eventos

Limites explícitos:
    - Não persiste eventos
    - Não escreve em stdout/stderr
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass
class SimpleLogger:
    source: str
    level: str = "INFO"
    events: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.level not in LOG_LEVELS:
            raise ValueError(f"invalid log level {self.level!r}, expected one of {LOG_LEVELS}")

    def bind(self, source: str) -> "SimpleLogger":
        """Logger para uma sub-origem, gravando na mesma lista de eventos."""
        return SimpleLogger(source=source, level=self.level, events=self.events)

    def enabled_for(self, level: str) -> bool:
        return LOG_LEVELS.index(level) >= LOG_LEVELS.index(self.level)

    def log(self, level: str, fmt: str, *args: Any) -> None:
        if level not in LOG_LEVELS:
            raise ValueError(f"invalid log level {level!r}")
        if not self.enabled_for(level):
            return
        self.events.append(
            {
                "source": self.source,
                "level": level,
                "message": fmt % args if args else fmt,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    def debug(self, fmt: str, *args: Any) -> None:
        self.log("DEBUG", fmt, *args)

    def info(self, fmt: str, *args: Any) -> None:
        self.log("INFO", fmt, *args)

    def warn(self, fmt: str, *args: Any) -> None:
        self.log("WARN", fmt, *args)

    def err(self, fmt: str, *args: Any) -> None:
        self.log("ERROR", fmt, *args)

    def messages(self, level: str = "") -> List[str]:
        """Mensagens registradas, opcionalmente filtradas por nível."""
        return [e["message"] for e in self.events if not level or e["level"] == level]
