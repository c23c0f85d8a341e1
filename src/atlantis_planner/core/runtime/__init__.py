"""
Runtime do atlantis-planner.

Este pacote resolve stages de plan e apply em listas ordenadas de Steps.

Componentes principais:
    - planner  → `ExecutionPlanner` e a política de fallback para Steps padrão
    - steps    → variantes de Step, `StepMeta` e stages
    - executor → contrato do executor do terraform (colaborador externo)
    - errors   → erros de resolução (workflow ou tipo de Step desconhecido)

Limites explícitos:
    - Não executa Steps
    - Não gerencia locks
"""

from .errors import PlanningError, UnknownStepTypeError, UnknownWorkflowError  # noqa: F401
from .executor import TerraformExec  # noqa: F401
from .planner import ExecutionPlanner  # noqa: F401
from .steps import (  # noqa: F401
    APPLY_STAGE_NAME,
    PLAN_STAGE_NAME,
    ApplyStage,
    ApplyStep,
    InitStep,
    PlanStage,
    PlanStep,
    RunStep,
    Step,
    StepKind,
    StepMeta,
)
