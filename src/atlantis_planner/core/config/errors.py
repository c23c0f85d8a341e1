# src/atlantis_planner/core/config/errors.py
"""
Exceções canônicas da camada de configuração do atlantis-planner.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura, o parse e a validação do arquivo `atlantis.yaml` de um
repositório.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Mensagens de erro são claras e direcionadas ao usuário
    - A ausência do arquivo é um sinal, não uma falha de configuração

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `ConfigFileNotFoundError` também é um `FileNotFoundError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do planner nem dos Steps
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados ao `atlantis.yaml`.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas de configuração e falhas de resolução
    """


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """
    Exceção levantada quando o repositório não possui `atlantis.yaml`.

    Decisões arquiteturais:
        - A ausência do arquivo é tratada pelo planner como fallback
          para os Steps padrão, não como erro
        - Herda de `FileNotFoundError` para permanecer reconhecível
          por chamadores que não conhecem a hierarquia do pacote
    """


class ConfigParseError(ConfigError):
    """Conteúdo do `atlantis.yaml` não é YAML válido."""


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Limites explícitos:
        - Não tenta normalizar ou encapsular estruturas inválidas
    """


class ConfigValidationError(ConfigError):
    """
    Exceção levantada quando uma entrada da configuração viola
    uma regra estrutural ou semântica.

    Campos:
        - field: caminho da chave inválida (ex.: `projects[0].dir`)
        - reason: descrição curta da violação
        - value: valor ofensivo, quando relevante

    A representação textual segue o formato `"<field>: <reason>"`,
    adequado para ser devolvido diretamente ao usuário.
    """

    def __init__(self, field: str, reason: str, value: Optional[Any] = None) -> None:
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"{field}: {reason}" if field else reason)
