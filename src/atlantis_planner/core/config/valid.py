# src/atlantis_planner/core/config/valid.py
"""
Forma canônica (validada) da configuração do `atlantis.yaml`.

As estruturas deste módulo só são produzidas pelas conversões `to_valid`
do módulo `raw`, depois que a validação correspondente foi bem-sucedida.
Todos os opcionais com default conhecido já estão resolvidos.

Invariantes:
    - `Project.dir` e `Project.workspace` nunca são vazios
    - `Project.terraform_version`, quando presente, já é um `Version`
    - A ordem de `Config.projects` é a ordem do arquivo
    - Estruturas são imutáveis (frozen)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from semver import Version


DEFAULT_WORKSPACE = "default"
APPROVED_APPLY_REQUIREMENT = "approved"
DEFAULT_AUTOPLAN_WHEN_MODIFIED = "**/*.tf"

INIT_STEP_NAME = "init"
PLAN_STEP_NAME = "plan"
APPLY_STEP_NAME = "apply"
RUN_STEP_NAME = "run"


@dataclass(frozen=True)
class Autoplan:
    when_modified: List[str]
    enabled: bool


def default_autoplan() -> Autoplan:
    """Política de autoplan aplicada quando o projeto não declara uma."""
    return Autoplan(when_modified=[DEFAULT_AUTOPLAN_WHEN_MODIFIED], enabled=True)


@dataclass(frozen=True)
class Project:
    """
    Entrada de projeto validada e normalizada.

    Campos:
        - dir: caminho do projeto relativo à raiz do repositório
        - workspace: workspace do terraform (default: "default")
        - workflow: nome do workflow; `None` significa "usar Steps padrão"
        - terraform_version: versão fixada do terraform, se declarada
        - autoplan: política de autoplan resolvida
        - apply_requirements: requisitos de apply (sem defaults implícitos)
        - name: nome opcional do projeto
    """
    dir: str
    workspace: str
    workflow: Optional[str] = None
    terraform_version: Optional[Version] = None
    autoplan: Autoplan = field(default_factory=default_autoplan)
    apply_requirements: List[str] = field(default_factory=list)
    name: Optional[str] = None


@dataclass(frozen=True)
class StepConfig:
    """
    Configuração de um Step dentro de um stage de workflow.

    `extra_args` é usado por `init`, `plan` e `apply`; `run` contém a
    linha de comando já separada em argumentos para Steps `run`.
    """
    step_type: str
    extra_args: List[str] = field(default_factory=list)
    run: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Stage:
    steps: List[StepConfig] = field(default_factory=list)


@dataclass(frozen=True)
class Workflow:
    """
    Workflow nomeado: par de stages `plan` e `apply`.

    Um stage ausente (`None`) indica que o workflow não o customiza e
    que os Steps padrão daquele stage devem ser usados.
    """
    name: str
    plan: Optional[Stage] = None
    apply: Optional[Stage] = None


@dataclass(frozen=True)
class Config:
    version: Optional[int] = None
    projects: List[Project] = field(default_factory=list)
    workflows: Dict[str, Workflow] = field(default_factory=dict)
