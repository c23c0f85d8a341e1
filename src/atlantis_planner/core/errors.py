"""
atlantis-planner — Canonical Error Payloads (v1)

Este módulo define o payload canônico com que erros do planner são
relatados ao usuário (ex.: em um comentário no pull request).

Erros são:
- explícitos
- serializáveis
- acionáveis (sempre que possível carregam um `hint`)

O planner não usa este módulo diretamente: ele propaga exceções tipadas
e o chamador decide como relatá-las, usando `describe_error`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .config.errors import (
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
    InvalidConfigRootTypeError,
)
from .config.parser import ATLANTIS_YAML_FILENAME
from .runtime.errors import UnknownStepTypeError, UnknownWorkflowError


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlannerErrorPayload:
    """
    Payload canônico de erro do atlantis-planner.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao usuário (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
CONFIG_INVALID_ROOT = "CONFIG_INVALID_ROOT"
CONFIG_VALIDATION_ERROR = "CONFIG_VALIDATION_ERROR"
CONFIG_ERROR = "CONFIG_ERROR"
WORKFLOW_NOT_FOUND = "WORKFLOW_NOT_FOUND"
UNKNOWN_STEP_TYPE = "UNKNOWN_STEP_TYPE"
PLANNER_ERROR = "PLANNER_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def config_validation_error(
    *,
    field: str,
    reason: str,
    value: Any = None,
    hint: str = f"Corrija a chave indicada no {ATLANTIS_YAML_FILENAME} e comente novamente no pull request.",
) -> PlannerErrorPayload:
    return PlannerErrorPayload(
        type=CONFIG_VALIDATION_ERROR,
        message=f"{field}: {reason}" if field else reason,
        details={"field": field, "reason": reason, "value": value},
        hint=hint,
    )


def workflow_not_found(
    *,
    workflow: str,
    hint: str = f"Declare o workflow em `workflows` no {ATLANTIS_YAML_FILENAME} ou remova a referência do projeto.",
) -> PlannerErrorPayload:
    return PlannerErrorPayload(
        type=WORKFLOW_NOT_FOUND,
        message=f'no workflow with key "{workflow}" defined',
        details={"workflow": workflow},
        hint=hint,
    )


def describe_error(exc: BaseException) -> PlannerErrorPayload:
    """
    Converte uma exceção levantada pelo planner em payload reportável.

    Exceções fora da hierarquia do pacote são encapsuladas como
    `PLANNER_ERROR`, preservando tipo e mensagem originais.
    """
    if isinstance(exc, ConfigValidationError):
        return config_validation_error(field=exc.field, reason=exc.reason, value=exc.value)
    if isinstance(exc, UnknownWorkflowError):
        return workflow_not_found(workflow=exc.workflow)
    if isinstance(exc, UnknownStepTypeError):
        return PlannerErrorPayload(
            type=UNKNOWN_STEP_TYPE,
            message=str(exc),
            details={"step_type": exc.step_type},
            hint="Use apenas os tipos de Step init, plan, apply ou run.",
        )
    if isinstance(exc, ConfigParseError):
        return PlannerErrorPayload(
            type=CONFIG_PARSE_ERROR,
            message=str(exc),
            details={"file": ATLANTIS_YAML_FILENAME},
            hint=f"Verifique a sintaxe YAML do {ATLANTIS_YAML_FILENAME}.",
        )
    if isinstance(exc, InvalidConfigRootTypeError):
        return PlannerErrorPayload(
            type=CONFIG_INVALID_ROOT,
            message=str(exc),
            details={"file": ATLANTIS_YAML_FILENAME},
            hint="A raiz do arquivo deve ser um mapeamento com `projects` e `workflows`.",
        )
    if isinstance(exc, ConfigError):
        return PlannerErrorPayload(type=CONFIG_ERROR, message=str(exc), details={})
    return PlannerErrorPayload(
        type=PLANNER_ERROR,
        message=str(exc) or type(exc).__name__,
        details={"exc_type": type(exc).__name__},
    )
