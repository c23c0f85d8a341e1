# src/atlantis_planner/core/runtime/planner.py
"""
Planejador de stages (plan/apply) de um projeto.

Este módulo resolve, para um par (projeto, workspace) de um repositório,
a lista ordenada de Steps que compõe o stage de plan ou de apply.

Política de resolução:
    1. Steps padrão do stage: plan → [init, plan]; apply → [apply]
    2. Leitura do `atlantis.yaml`:
        - arquivo ausente → Steps padrão
        - erro de parse/validação → propagado ao chamador
    3. Primeiro projeto com `dir` e `workspace` iguais aos solicitados:
        - nenhum projeto → Steps padrão
        - projeto sem workflow → Steps padrão
        - workflow inexistente → `UnknownWorkflowError`
    4. Expansão do stage do workflow em Steps, na ordem declarada

Decisões arquiteturais:
    - O primeiro projeto correspondente vence; duplicatas posteriores
      são ignoradas e reportadas com WARN
    - Tipos de Step desconhecidos falham explicitamente
      (`UnknownStepTypeError`), nunca produzem um Step vazio
    - Workflow que não declara o stage solicitado usa os Steps padrão

Invariantes:
    - Todos os Steps retornados compartilham uma única instância de StepMeta
    - A ordem dos Steps é exatamente a ordem da configuração
    - Nenhum estado é mantido entre chamadas

Limites explícitos:
    - Não executa Steps
    - Não adquire locks
    - Não faz cache da configuração
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from semver import Version

from atlantis_planner.core.config.errors import ConfigFileNotFoundError
from atlantis_planner.core.config.parser import ATLANTIS_YAML_FILENAME, ParserValidator
from atlantis_planner.core.config.valid import (
    APPLY_STEP_NAME,
    INIT_STEP_NAME,
    PLAN_STEP_NAME,
    RUN_STEP_NAME,
    StepConfig,
)
from atlantis_planner.core.log import SimpleLogger
from .errors import UnknownStepTypeError, UnknownWorkflowError
from .executor import TerraformExec
from .steps import (
    APPLY_STAGE_NAME,
    PLAN_STAGE_NAME,
    ApplyStage,
    ApplyStep,
    InitStep,
    PlanStage,
    PlanStep,
    RunStep,
    Step,
    StepMeta,
)


@dataclass(frozen=True)
class ExecutionPlanner:
    """
    Planner de stages.

    Campos:
        - terraform_executor: executor repassado a cada StepMeta
        - default_tf_version: versão do terraform usada nos Steps
        - parser_validator: leitor do `atlantis.yaml`
    """
    terraform_executor: Optional[TerraformExec] = None
    default_tf_version: Optional[Version] = None
    parser_validator: ParserValidator = field(default_factory=ParserValidator)

    def build_plan_stage(
        self,
        log: SimpleLogger,
        repo_dir: str,
        workspace: str,
        rel_project_path: str,
        extra_comment_args: Optional[List[str]],
        username: str,
    ) -> PlanStage:
        """
        Resolve o stage de plan do projeto.

        Raises:
            ConfigError: se o `atlantis.yaml` existir e for inválido
                (exceto `ConfigFileNotFoundError`, tratado como fallback).
            UnknownWorkflowError: se o projeto referenciar workflow inexistente.
            UnknownStepTypeError: se um StepConfig tiver tipo desconhecido.
        """
        defaults = self._default_plan_steps(log, repo_dir, workspace, rel_project_path, extra_comment_args, username)
        steps = self._build_stage(
            PLAN_STAGE_NAME, log, repo_dir, workspace, rel_project_path, extra_comment_args, username, defaults
        )
        return PlanStage(steps=steps)

    def build_apply_stage(
        self,
        log: SimpleLogger,
        repo_dir: str,
        workspace: str,
        rel_project_path: str,
        extra_comment_args: Optional[List[str]],
        username: str,
    ) -> ApplyStage:
        """Resolve o stage de apply do projeto. Mesmas exceções de `build_plan_stage`."""
        defaults = self._default_apply_steps(log, repo_dir, workspace, rel_project_path, extra_comment_args, username)
        steps = self._build_stage(
            APPLY_STAGE_NAME, log, repo_dir, workspace, rel_project_path, extra_comment_args, username, defaults
        )
        return ApplyStage(steps=steps)

    def _build_stage(
        self,
        stage_name: str,
        log: SimpleLogger,
        repo_dir: str,
        workspace: str,
        rel_project_path: str,
        extra_comment_args: Optional[List[str]],
        username: str,
        defaults: List[Step],
    ) -> List[Step]:
        try:
            config = self.parser_validator.read_config(repo_dir)
        except ConfigFileNotFoundError:
            log.info("no %s file found; continuing with defaults", ATLANTIS_YAML_FILENAME)
            return defaults

        matches = [p for p in config.projects if p.dir == rel_project_path and p.workspace == workspace]
        if not matches:
            log.info(
                "no project with dir %r and workspace %r defined; continuing with defaults",
                rel_project_path,
                workspace,
            )
            return defaults

        project = matches[0]
        if len(matches) > 1:
            log.warn(
                "%d projects with dir %r and workspace %r defined in %s; using the first one",
                len(matches),
                rel_project_path,
                workspace,
                ATLANTIS_YAML_FILENAME,
            )

        workflow_name = project.workflow
        if workflow_name is None:
            log.info("no %s workflow set; continuing with defaults", ATLANTIS_YAML_FILENAME)
            return defaults

        workflow = config.workflows.get(workflow_name)
        if workflow is None:
            raise UnknownWorkflowError(workflow_name)

        stage = workflow.plan if stage_name == PLAN_STAGE_NAME else workflow.apply
        if stage is None:
            log.info("workflow %r does not define a %s stage; continuing with defaults", workflow_name, stage_name)
            return defaults

        meta = self._build_meta(log, repo_dir, workspace, rel_project_path, extra_comment_args, username)
        return [self._build_step(step_config, meta) for step_config in stage.steps]

    @staticmethod
    def _build_step(step_config: StepConfig, meta: StepMeta) -> Step:
        step_type = step_config.step_type
        if step_type == INIT_STEP_NAME:
            return InitStep(meta=meta, extra_args=list(step_config.extra_args))
        if step_type == PLAN_STEP_NAME:
            return PlanStep(meta=meta, extra_args=list(step_config.extra_args))
        if step_type == APPLY_STEP_NAME:
            return ApplyStep(meta=meta, extra_args=list(step_config.extra_args))
        if step_type == RUN_STEP_NAME:
            return RunStep(meta=meta, commands=list(step_config.run))
        raise UnknownStepTypeError(step_type)

    def _build_meta(
        self,
        log: SimpleLogger,
        repo_dir: str,
        workspace: str,
        rel_project_path: str,
        extra_comment_args: Optional[List[str]],
        username: str,
    ) -> StepMeta:
        return StepMeta(
            log=log,
            workspace=workspace,
            absolute_path=os.path.normpath(os.path.join(repo_dir, rel_project_path)),
            dir_relative_to_repo_root=rel_project_path,
            # Sem versão explícita por Step: usa a versão padrão do planner.
            terraform_version=self.default_tf_version,
            terraform_executor=self.terraform_executor,
            extra_comment_args=list(extra_comment_args or []),
            username=username,
        )

    def _default_plan_steps(self, log, repo_dir, workspace, rel_project_path, extra_comment_args, username) -> List[Step]:
        meta = self._build_meta(log, repo_dir, workspace, rel_project_path, extra_comment_args, username)
        return [InitStep(meta=meta), PlanStep(meta=meta)]

    def _default_apply_steps(self, log, repo_dir, workspace, rel_project_path, extra_comment_args, username) -> List[Step]:
        meta = self._build_meta(log, repo_dir, workspace, rel_project_path, extra_comment_args, username)
        return [ApplyStep(meta=meta)]
