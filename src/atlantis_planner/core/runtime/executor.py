# src/atlantis_planner/core/runtime/executor.py
"""
Contrato do executor do terraform consumido pelos Steps.

O planner apenas repassa o executor para o `StepMeta`; a execução real
do binário pertence a um colaborador externo.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from semver import Version

from atlantis_planner.core.log import SimpleLogger


@runtime_checkable
class TerraformExec(Protocol):
    """
    Executor do terraform.

    Contrato:
        - executa o terraform na versão `v` (ou na versão padrão, se `None`)
        - `path` é o diretório de trabalho absoluto do projeto
        - retorna a saída capturada; falhas são levantadas como exceção
    """

    def run_command_with_version(
        self,
        log: SimpleLogger,
        path: str,
        args: List[str],
        v: Optional[Version],
        workspace: str,
    ) -> str:
        ...
