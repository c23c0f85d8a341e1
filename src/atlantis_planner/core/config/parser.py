# src/atlantis_planner/core/config/parser.py
"""
Leitura, parse e validação do `atlantis.yaml` de um repositório.

Este módulo é responsável por transformar o arquivo de configuração
encontrado na raiz do repositório em uma `Config` canônica, pronta
para ser consultada pelo planner.

Fluxo:
    1. leitura do arquivo `<repo_dir>/atlantis.yaml`
    2. parse YAML (`SafeLoader` preservando o texto de escalares numéricos)
    3. validação do tipo raiz
    4. construção do modelo raw, validação e normalização (`to_valid`)

Decisões arquiteturais:
    - A ausência do arquivo é sinalizada com `ConfigFileNotFoundError`;
      decidir o fallback é responsabilidade do chamador
    - Arquivos vazios são interpretados como configuração vazia
    - Números não citados (`terraform_version: 0.12`) chegam aos campos
      de texto exatamente como escritos no arquivo
    - Apenas a ausência do caminho é tratada como "arquivo inexistente";
      outros erros de leitura propagam sem alteração
    - Nenhum cache é mantido: cada chamada lê o arquivo novamente

Invariantes:
    - O retorno é sempre uma `Config` validada
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não seleciona projetos nem workflows
    - Não interage com o executor do terraform
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import yaml  # PyYAML

from .errors import ConfigFileNotFoundError, ConfigParseError, InvalidConfigRootTypeError
from .raw import NumericScalar, RawConfig
from .valid import Config


ATLANTIS_YAML_FILENAME = "atlantis.yaml"


class _ScalarTextLoader(yaml.SafeLoader):
    """`SafeLoader` que mantém inteiros e floats não citados como texto."""


def _construct_numeric_scalar(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> NumericScalar:
    return NumericScalar(loader.construct_scalar(node))


_ScalarTextLoader.add_constructor("tag:yaml.org,2002:int", _construct_numeric_scalar)
_ScalarTextLoader.add_constructor("tag:yaml.org,2002:float", _construct_numeric_scalar)


class ParserValidator:
    """
    Parser e validador do `atlantis.yaml`.

    A instância não possui estado mutável e pode ser compartilhada entre
    chamadas concorrentes do planner.
    """

    def read_config(self, repo_dir: Union[str, Path]) -> Config:
        """
        Lê e valida o `atlantis.yaml` na raiz de `repo_dir`.

        Raises:
            ConfigFileNotFoundError: se o arquivo não existir.
            OSError: se o caminho existir mas não puder ser lido
                (ex.: `atlantis.yaml` é um diretório).
            ConfigParseError: se o conteúdo não for YAML válido.
            InvalidConfigRootTypeError: se a raiz não for um mapeamento.
            ConfigValidationError: se alguma regra de validação falhar.
        """
        path = Path(repo_dir) / ATLANTIS_YAML_FILENAME
        if not path.exists():
            raise ConfigFileNotFoundError(f"{ATLANTIS_YAML_FILENAME} not found: {path}")

        return self.parse(path.read_bytes())

    def parse(self, content: Union[str, bytes]) -> Config:
        """
        Faz o parse e a validação de um conteúdo YAML já carregado.

        Bytes são decodificados pelo próprio PyYAML; uma codificação
        inválida é reportada como `ConfigParseError`.
        """
        try:
            data = yaml.load(content, Loader=_ScalarTextLoader)
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"parsing {ATLANTIS_YAML_FILENAME}: {exc}") from exc

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise InvalidConfigRootTypeError(
                f"{ATLANTIS_YAML_FILENAME} root must be a mapping, got: {type(data).__name__}"
            )

        raw = RawConfig.from_mapping(data)
        raw.validate()
        return raw.to_valid()
