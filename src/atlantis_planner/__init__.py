# src/atlantis_planner/__init__.py
"""
atlantis-planner — planejamento de stages terraform a partir do `atlantis.yaml`.

Dado um checkout de repositório, o caminho de um projeto, um workspace,
os argumentos extras de um comentário e o usuário solicitante, o
atlantis-planner decide quais Steps (init, plan, apply, run) compõem o
stage de plan ou de apply daquele projeto.

Arquitetura em alto nível:
    - core.config  → modelo raw, validação, normalização e parse do YAML
    - core.runtime → ExecutionPlanner, StepMeta e variantes de Step
    - core.log     → log estruturado passado aos Steps
    - core.errors  → payloads de erro para relato ao usuário

Limites explícitos:
    - Não executa o terraform
    - Não conversa com o host de VCS
    - Não gerencia locks de workspace
"""

from .core.config import ParserValidator
from .core.log import SimpleLogger
from .core.runtime import ApplyStage, ExecutionPlanner, PlanStage

__all__ = ["ExecutionPlanner", "ParserValidator", "SimpleLogger", "PlanStage", "ApplyStage"]
