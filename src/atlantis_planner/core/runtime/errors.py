# src/atlantis_planner/core/runtime/errors.py
"""
Exceções de resolução do planner.

Diferente dos erros de configuração, estas exceções surgem ao resolver
o stage de um projeto específico: a configuração foi lida e validada,
mas a combinação projeto/workflow não pode ser expandida em Steps.

Nenhuma destas exceções é convertida em fallback para os Steps padrão.
"""

from __future__ import annotations


class PlanningError(Exception):
    """Erro base da resolução de stages."""


class UnknownWorkflowError(PlanningError):
    """
    Projeto referencia um workflow que não existe em `workflows`.

    Indica uma configuração quebrada; o planner nunca substitui o
    workflow ausente pelos Steps padrão.
    """

    def __init__(self, workflow: str) -> None:
        self.workflow = workflow
        super().__init__(f'no workflow with key "{workflow}" defined')


class UnknownStepTypeError(PlanningError):
    """`StepConfig` com tipo fora de init, plan, apply e run."""

    def __init__(self, step_type: str) -> None:
        self.step_type = step_type
        super().__init__(f'unknown step type "{step_type}"')
