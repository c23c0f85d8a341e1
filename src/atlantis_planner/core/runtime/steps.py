# src/atlantis_planner/core/runtime/steps.py
"""
Steps e stages produzidos pelo planner.

Este módulo define as variantes de Step (init, plan, apply, run), o
contexto compartilhado `StepMeta` e os stages que as agrupam.

Um Step é um valor puramente declarativo: carrega apenas os dados
necessários para que um executor externo realize a operação depois.

Componentes principais:
    - StepKind   → enum do conjunto fechado de tipos de Step
    - StepMeta   → contexto de execução compartilhado por um stage
    - InitStep, PlanStep, ApplyStep, RunStep → variantes de Step
    - PlanStage, ApplyStage → listas ordenadas de Steps

Invariantes:
    - Todos os Steps de um stage referenciam a mesma instância de StepMeta
    - Um StepMeta nunca é compartilhado entre resoluções distintas
    - Steps e StepMeta são imutáveis (frozen)

Limites explícitos:
    - Não executa Steps
    - Não invoca o terraform
    - Não interpreta saídas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from semver import Version

from atlantis_planner.core.log import SimpleLogger
from .executor import TerraformExec


PLAN_STAGE_NAME = "plan"
APPLY_STAGE_NAME = "apply"


class StepKind(str, Enum):
    """
    Tipos de Step suportados.

    Os valores textuais coincidem com as tags usadas no `atlantis.yaml`.
    """
    INIT = "init"
    PLAN = "plan"
    APPLY = "apply"
    RUN = "run"


@dataclass(frozen=True)
class StepMeta:
    """
    Contexto de execução compartilhado por todos os Steps de um stage.

    Campos:
        - log: handle de log da requisição
        - workspace: workspace do terraform
        - absolute_path: caminho absoluto do projeto no checkout
        - dir_relative_to_repo_root: caminho do projeto relativo ao repositório
        - terraform_version: versão do terraform a usar
        - terraform_executor: colaborador que executa o terraform
        - extra_comment_args: argumentos extras do comentário do usuário
        - username: usuário que solicitou a operação
    """
    log: SimpleLogger
    workspace: str
    absolute_path: str
    dir_relative_to_repo_root: str
    terraform_version: Optional[Version]
    terraform_executor: Optional[TerraformExec]
    extra_comment_args: List[str] = field(default_factory=list)
    username: str = ""


@dataclass(frozen=True)
class InitStep:
    kind: ClassVar[StepKind] = StepKind.INIT
    meta: StepMeta
    extra_args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PlanStep:
    kind: ClassVar[StepKind] = StepKind.PLAN
    meta: StepMeta
    extra_args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ApplyStep:
    kind: ClassVar[StepKind] = StepKind.APPLY
    meta: StepMeta
    extra_args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RunStep:
    """Comando customizado; `commands` é a linha de comando já separada."""
    kind: ClassVar[StepKind] = StepKind.RUN
    meta: StepMeta
    commands: List[str] = field(default_factory=list)


Step = Union[InitStep, PlanStep, ApplyStep, RunStep]


@dataclass(frozen=True)
class PlanStage:
    steps: List[Step] = field(default_factory=list)


@dataclass(frozen=True)
class ApplyStage:
    steps: List[Step] = field(default_factory=list)
