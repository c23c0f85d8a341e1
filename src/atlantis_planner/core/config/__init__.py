# src/atlantis_planner/core/config/__init__.py

"""
Camada de configuração do atlantis-planner.

Este pacote contém as estruturas e utilitários responsáveis por ler,
validar e normalizar o `atlantis.yaml` de um repositório.

Componentes:
    - raw    → modelo bruto, validação e conversão `to_valid`
    - valid  → forma canônica com defaults resolvidos
    - parser → leitura do arquivo e parse YAML
    - errors → exceções tipadas da camada

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros de validação são direcionados ao usuário
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não planeja stages
    - Não executa o terraform
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    InvalidConfigRootTypeError,
)
from .parser import ATLANTIS_YAML_FILENAME, ParserValidator  # noqa: F401
from .raw import RawAutoplan, RawConfig, RawProject, RawStage, RawStepConfig, RawWorkflow  # noqa: F401
from .valid import (  # noqa: F401
    APPROVED_APPLY_REQUIREMENT,
    DEFAULT_WORKSPACE,
    Autoplan,
    Config,
    Project,
    Stage,
    StepConfig,
    Workflow,
)
