# tests/conftest.py
"""
Fixtures compartilhados para testes do atlantis-planner.

Este módulo define fixtures reutilizáveis que fornecem:
- um logger estruturado isolado por teste
- um executor de terraform falso (duck typing, sem herança)
- uma fábrica de repositórios com `atlantis.yaml` em `tmp_path`
- um ExecutionPlanner configurado com versão padrão determinística

Decisões arquiteturais:
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - O `atlantis.yaml` é escrito em disco, exercitando o parser real

Invariantes:
    - Nenhuma fixture executa o terraform
    - Cada teste recebe seu próprio diretório de repositório

Este módulo existe como infraestrutura de teste e não
como validação funcional do planner.
"""

from pathlib import Path

import pytest


DEFAULT_TF_VERSION = "0.11.7"


# =====================================================
# Logging / executor
# =====================================================

@pytest.fixture
def log():
    """SimpleLogger isolado, em nível DEBUG para capturar todos os eventos."""
    from atlantis_planner.core.log import SimpleLogger

    return SimpleLogger(source="runatlantis/atlantis#1", level="DEBUG")


@pytest.fixture
def FakeTerraformExec():
    """
    Fixture factory que fornece um executor de terraform falso.

    A classe retornada satisfaz o protocolo `TerraformExec` por duck typing
    e apenas registra as chamadas recebidas.
    """

    class _FakeTerraformExec:
        def __init__(self):
            self.calls = []

        def run_command_with_version(self, log, path, args, v, workspace):
            self.calls.append((path, list(args), v, workspace))
            return ""

    return _FakeTerraformExec


@pytest.fixture
def tf_exec(FakeTerraformExec):
    return FakeTerraformExec()


# =====================================================
# Repositório / atlantis.yaml
# =====================================================

@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def write_atlantis_yaml(repo_dir: Path):
    """
    Fábrica que escreve o `atlantis.yaml` na raiz do repositório de teste.

    Returns:
        Callable[[str], Path]: recebe o conteúdo YAML e retorna o caminho escrito.
    """

    def _write(content: str) -> Path:
        path = repo_dir / "atlantis.yaml"
        path.write_text(content.lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def planner(tf_exec):
    """ExecutionPlanner com versão padrão fixa e parser real."""
    from semver import Version

    from atlantis_planner.core.config.parser import ParserValidator
    from atlantis_planner.core.runtime.planner import ExecutionPlanner

    return ExecutionPlanner(
        terraform_executor=tf_exec,
        default_tf_version=Version.parse(DEFAULT_TF_VERSION),
        parser_validator=ParserValidator(),
    )
