# src/atlantis_planner/core/config/raw.py
"""
Modelo bruto (raw) da configuração do `atlantis.yaml`.

Este módulo representa o conteúdo do arquivo exatamente como foi
declarado pelo usuário, com todos os campos opcionais, e concentra as
três responsabilidades que antecedem o uso da configuração:

    - construção estrutural a partir do YAML (`from_mapping`)
    - validação estrutural e semântica (`validate`)
    - normalização para a forma canônica (`to_valid`)

Decisões arquiteturais:
    - A validação é implementada sem dependências externas (ex.: Pydantic),
      com verificações explícitas por campo
    - Chaves desconhecidas são rejeitadas, nunca ignoradas
    - `to_valid` assume que `validate` já foi executado com sucesso
    - Mensagens de erro sempre nomeiam a chave (e o valor) ofensivos

Invariantes:
    - Objetos raw são imutáveis após a construção
    - Nenhuma regra de default é aplicada antes de `to_valid`

Limites explícitos:
    - Não lê arquivos (ver `parser`)
    - Não resolve workflows para projetos (ver planner)
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from semver import Version

from .errors import ConfigValidationError
from .valid import (
    APPLY_STEP_NAME,
    APPROVED_APPLY_REQUIREMENT,
    DEFAULT_AUTOPLAN_WHEN_MODIFIED,
    DEFAULT_WORKSPACE,
    INIT_STEP_NAME,
    PLAN_STEP_NAME,
    RUN_STEP_NAME,
    Autoplan,
    Config,
    Project,
    Stage,
    StepConfig,
    Workflow,
    default_autoplan,
)


SUPPORTED_CONFIG_VERSION = 2

_ARGS_STEP_TYPES = (INIT_STEP_NAME, PLAN_STEP_NAME, APPLY_STEP_NAME)
_STEP_TYPES = _ARGS_STEP_TYPES + (RUN_STEP_NAME,)


class NumericScalar(str):
    """
    Escalar YAML numérico não citado (ex.: `0.12`, `2019`), preservado
    como o texto declarado no arquivo.

    Campos de texto o aceitam como string comum; `version` o converte
    para inteiro.
    """


def parse_version(text: str) -> Version:
    """
    Converte uma versão do terraform em `semver.Version`.

    Aceita o prefixo `v` e versões sem minor/patch (`0.12`, `1`).

    Raises:
        ValueError: se o texto não for uma versão semântica.
    """
    if text.startswith("v"):
        text = text[1:]
    return Version.parse(text, optional_minor_and_patch=True)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _expect(cond: bool, path: str, reason: str, value: Any = None) -> None:
    if not cond:
        raise ConfigValidationError(path, reason, value)


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _is_str_list(x: Any) -> bool:
    return isinstance(x, list) and all(isinstance(i, str) for i in x)


def _check_keys(data: Mapping[str, Any], allowed: Iterable[str], path: str) -> None:
    allowed = set(allowed)
    for key in data:
        _expect(key in allowed, _join(path, str(key)), "unknown key", key)


def _optional_str(data: Mapping[str, Any], key: str, path: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    _expect(isinstance(value, str), _join(path, key), "must be a string", value)
    return str(value)


def _optional_str_list(data: Mapping[str, Any], key: str, path: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    _expect(_is_str_list(value), _join(path, key), "must be a list of strings", value)
    return list(value)


def _optional_mapping(data: Mapping[str, Any], key: str, path: str) -> Optional[Dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return None
    _expect(isinstance(value, dict), _join(path, key), "must be a mapping", value)
    return value


# =====================================================
# Projects
# =====================================================

@dataclass(frozen=True)
class RawAutoplan:
    when_modified: Optional[List[str]] = None
    enabled: Optional[bool] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], path: str = "autoplan") -> "RawAutoplan":
        _check_keys(data, ("when_modified", "enabled"), path)
        enabled = data.get("enabled")
        _expect(enabled is None or isinstance(enabled, bool), _join(path, "enabled"), "must be a boolean", enabled)
        return cls(
            when_modified=_optional_str_list(data, "when_modified", path),
            enabled=enabled,
        )

    def to_valid(self) -> Autoplan:
        when_modified = self.when_modified
        if when_modified is None:
            when_modified = [DEFAULT_AUTOPLAN_WHEN_MODIFIED]
        enabled = True if self.enabled is None else self.enabled
        return Autoplan(when_modified=list(when_modified), enabled=enabled)


@dataclass(frozen=True)
class RawProject:
    """
    Entrada de projeto tal como declarada em `projects` no `atlantis.yaml`.

    Todos os campos são opcionais neste nível; a obrigatoriedade de `dir`
    é verificada por `validate`, e os defaults (workspace, autoplan) são
    aplicados apenas por `to_valid`.

    Ciclo de vida:
        - construída uma vez por parse do arquivo
        - imutável após o parse
        - descartada após a normalização
    """
    name: Optional[str] = None
    dir: Optional[str] = None
    workspace: Optional[str] = None
    workflow: Optional[str] = None
    terraform_version: Optional[str] = None
    autoplan: Optional[RawAutoplan] = None
    apply_requirements: Optional[List[str]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], path: str = "") -> "RawProject":
        """
        Constrói a entrada a partir do mapeamento YAML, checando apenas
        chaves conhecidas e tipos dos campos.
        """
        _check_keys(
            data,
            ("name", "dir", "workspace", "workflow", "terraform_version", "autoplan", "apply_requirements"),
            path,
        )
        autoplan = _optional_mapping(data, "autoplan", path)
        return cls(
            name=_optional_str(data, "name", path),
            dir=_optional_str(data, "dir", path),
            workspace=_optional_str(data, "workspace", path),
            workflow=_optional_str(data, "workflow", path),
            terraform_version=_optional_str(data, "terraform_version", path),
            autoplan=RawAutoplan.from_mapping(autoplan, _join(path, "autoplan")) if autoplan is not None else None,
            apply_requirements=_optional_str_list(data, "apply_requirements", path),
        )

    def validate(self, path: str = "") -> None:
        """
        Valida a entrada de projeto.

        Regras:
            - `dir` é obrigatório e não pode conter `..`
            - cada item de `apply_requirements` deve ser `approved`
            - `terraform_version`, se presente, deve ser uma versão válida
            - `workspace`, se presente, não pode ser vazio

        Raises:
            ConfigValidationError: na primeira regra violada. Para versões
                inválidas, o `ValueError` do semver fica encadeado em
                `__cause__`.
        """
        dir_path = _join(path, "dir")
        _expect(_is_non_empty_str(self.dir), dir_path, "cannot be blank", self.dir)
        _expect(".." not in self.dir, dir_path, "cannot contain '..'", self.dir)

        if self.workspace is not None:
            _expect(_is_non_empty_str(self.workspace), _join(path, "workspace"), "cannot be blank", self.workspace)

        for req in self.apply_requirements or []:
            _expect(
                req == APPROVED_APPLY_REQUIREMENT,
                _join(path, "apply_requirements"),
                f'"{req}" not supported, only {APPROVED_APPLY_REQUIREMENT} is supported',
                req,
            )

        if self.terraform_version is not None:
            try:
                parse_version(self.terraform_version)
            except ValueError as exc:
                raise ConfigValidationError(
                    _join(path, "terraform_version"),
                    f'version "{self.terraform_version}" could not be parsed: {exc}',
                    self.terraform_version,
                ) from exc

    def to_valid(self) -> Project:
        workspace = DEFAULT_WORKSPACE if self.workspace is None else self.workspace

        terraform_version = None
        if self.terraform_version is not None:
            terraform_version = parse_version(self.terraform_version)

        autoplan = default_autoplan() if self.autoplan is None else self.autoplan.to_valid()

        # Não existem apply requirements padrão.
        apply_requirements = list(self.apply_requirements or [])

        return Project(
            dir=self.dir,
            workspace=workspace,
            workflow=self.workflow,
            terraform_version=terraform_version,
            autoplan=autoplan,
            apply_requirements=apply_requirements,
            name=self.name,
        )


# =====================================================
# Workflows
# =====================================================

@dataclass(frozen=True)
class RawStepConfig:
    """
    Step declarado em um stage de workflow.

    Formatos aceitos no YAML:
        - init                      (string simples: init, plan, apply)
        - plan: {extra_args: [...]}  (mapa com chave única)
        - run: "comando arg1 arg2"
    """
    step_type: str
    extra_args: Optional[List[str]] = None
    run: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any, path: str) -> "RawStepConfig":
        if isinstance(value, str):
            return cls(step_type=value)

        _expect(isinstance(value, dict), path, "step must be a string or a mapping", value)
        _expect(len(value) == 1, path, "step must have exactly one key", sorted(map(str, value)))

        step_type, args = next(iter(value.items()))
        step_type = str(step_type)
        key_path = _join(path, step_type)

        if step_type in _ARGS_STEP_TYPES:
            if args is None:
                return cls(step_type=step_type)
            _expect(isinstance(args, dict), key_path, "must be a mapping", args)
            _check_keys(args, ("extra_args",), key_path)
            return cls(step_type=step_type, extra_args=_optional_str_list(args, "extra_args", key_path))

        if step_type == RUN_STEP_NAME:
            _expect(isinstance(args, str), key_path, "must be a string", args)
            return cls(step_type=step_type, run=args)

        # Tipo desconhecido: rejeitado por `validate`.
        return cls(step_type=step_type)

    def validate(self, path: str = "") -> None:
        _expect(self.step_type in _STEP_TYPES, path, f'unknown step type "{self.step_type}"', self.step_type)
        if self.step_type == RUN_STEP_NAME:
            run_path = _join(path, RUN_STEP_NAME)
            _expect(_is_non_empty_str(self.run), run_path, "cannot be blank", self.run)
            try:
                shlex.split(self.run)
            except ValueError as exc:
                raise ConfigValidationError(run_path, f"could not be parsed: {exc}", self.run) from exc

    def to_valid(self) -> StepConfig:
        if self.step_type == RUN_STEP_NAME:
            return StepConfig(step_type=self.step_type, run=shlex.split(self.run))
        return StepConfig(step_type=self.step_type, extra_args=list(self.extra_args or []))


@dataclass(frozen=True)
class RawStage:
    steps: Optional[List[RawStepConfig]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], path: str) -> "RawStage":
        _check_keys(data, ("steps",), path)
        steps = data.get("steps")
        if steps is None:
            return cls()
        steps_path = _join(path, "steps")
        _expect(isinstance(steps, list), steps_path, "must be a list", steps)
        return cls(steps=[RawStepConfig.from_value(s, f"{steps_path}[{i}]") for i, s in enumerate(steps)])

    def validate(self, path: str = "") -> None:
        for i, step in enumerate(self.steps or []):
            step.validate(f"{_join(path, 'steps')}[{i}]")

    def to_valid(self) -> Stage:
        return Stage(steps=[s.to_valid() for s in self.steps or []])


@dataclass(frozen=True)
class RawWorkflow:
    plan: Optional[RawStage] = None
    apply: Optional[RawStage] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], path: str) -> "RawWorkflow":
        if data is None:
            return cls()
        _expect(isinstance(data, dict), path, "must be a mapping", data)
        _check_keys(data, ("plan", "apply"), path)

        stages: Dict[str, Optional[RawStage]] = {}
        for key in ("plan", "apply"):
            if key not in data:
                stages[key] = None
                continue
            stage = data[key]
            stage_path = _join(path, key)
            if stage is None:
                # `plan:` sem conteúdo declara um stage vazio.
                stages[key] = RawStage(steps=[])
                continue
            _expect(isinstance(stage, dict), stage_path, "must be a mapping", stage)
            stages[key] = RawStage.from_mapping(stage, stage_path)

        return cls(plan=stages["plan"], apply=stages["apply"])

    def validate(self, path: str = "") -> None:
        if self.plan is not None:
            self.plan.validate(_join(path, "plan"))
        if self.apply is not None:
            self.apply.validate(_join(path, "apply"))

    def to_valid(self, name: str) -> Workflow:
        return Workflow(
            name=name,
            plan=self.plan.to_valid() if self.plan is not None else None,
            apply=self.apply.to_valid() if self.apply is not None else None,
        )


# =====================================================
# Config (raiz)
# =====================================================

@dataclass(frozen=True)
class RawConfig:
    """
    Raiz do `atlantis.yaml`: versão, lista ordenada de projetos e
    mapa de workflows nomeados.

    Decisões arquiteturais:
        - `version` é opcional; quando presente deve ser 2
        - A ordem de `projects` é preservada exatamente
        - A referência `project.workflow -> workflows` não é verificada
          aqui: o planner a resolve apenas para o projeto selecionado
    """
    version: Optional[int] = None
    projects: List[RawProject] = field(default_factory=list)
    workflows: Dict[str, RawWorkflow] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawConfig":
        _check_keys(data, ("version", "projects", "workflows"), "")

        version = data.get("version")
        if isinstance(version, NumericScalar) and version.isdigit():
            version = int(version)
        _expect(
            version is None or (isinstance(version, int) and not isinstance(version, bool)),
            "version",
            "must be an integer",
            version,
        )

        projects_data = data.get("projects") or []
        _expect(isinstance(projects_data, list), "projects", "must be a list", projects_data)
        projects: List[RawProject] = []
        for i, p in enumerate(projects_data):
            p_path = f"projects[{i}]"
            _expect(isinstance(p, dict), p_path, "must be a mapping", p)
            projects.append(RawProject.from_mapping(p, p_path))

        workflows_data = data.get("workflows") or {}
        _expect(isinstance(workflows_data, dict), "workflows", "must be a mapping", workflows_data)
        workflows: Dict[str, RawWorkflow] = {}
        for name, w in workflows_data.items():
            _expect(_is_non_empty_str(name), "workflows", "workflow names must be non-empty strings", name)
            workflows[name] = RawWorkflow.from_mapping(w, f"workflows.{name}")

        return cls(version=version, projects=projects, workflows=workflows)

    def validate(self) -> None:
        if self.version is not None:
            _expect(
                self.version == SUPPORTED_CONFIG_VERSION,
                "version",
                f"only version {SUPPORTED_CONFIG_VERSION} is supported",
                self.version,
            )
        for i, project in enumerate(self.projects):
            project.validate(f"projects[{i}]")
        for name, workflow in self.workflows.items():
            workflow.validate(f"workflows.{name}")

    def to_valid(self) -> Config:
        return Config(
            version=self.version,
            projects=[p.to_valid() for p in self.projects],
            workflows={name: w.to_valid(name) for name, w in self.workflows.items()},
        )
